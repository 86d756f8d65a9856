"""
Asset Factory
Handles asset registration.

This factory provides:
- Validation of the registration input
- Identifier and barcode allocation from the registry's current contents
- Construction of the new asset at status checked-in

Insertion into the registry and persistence are done by the tracker context.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

from asset_tracker.business.core.exceptions import InvalidRegistrationError
from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus, EmployeeType
from asset_tracker.data.core.sequences.asset_id_allocator import AssetIDAllocator
from asset_tracker.data.core.serialization import as_utc, utc_now


@dataclass(frozen=True)
class AssetRegistration:
    """Typed input for registering a new asset"""
    employee_name: str
    department: str
    asset_type: str
    asset_name: str
    employee_type: EmployeeType = EmployeeType.EMPLOYEE
    serial_number: Optional[str] = None
    notes: Optional[str] = None


class AssetFactory:
    """Builds new Asset instances from registrations"""

    REQUIRED_FIELDS = ('employee_name', 'department', 'asset_type', 'asset_name')

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.clock = clock or utc_now
        self.id_factory = id_factory or (lambda: uuid.uuid4().hex)

    def validate(self, registration: AssetRegistration) -> None:
        missing = [
            field_name for field_name in self.REQUIRED_FIELDS
            if not (getattr(registration, field_name) or '').strip()
        ]
        if missing:
            raise InvalidRegistrationError(f"Missing required fields: {', '.join(missing)}")
        try:
            EmployeeType(registration.employee_type)
        except ValueError as e:
            raise InvalidRegistrationError(f"Unknown employee type: {registration.employee_type!r}") from e

    def create_asset(self, registration: AssetRegistration, existing_asset_ids: Iterable[str]) -> Asset:
        """
        Create a new asset with the next sequential identifier

        Args:
            registration: Registration input
            existing_asset_ids: Asset identifiers already in the registry

        Returns:
            Asset: The new asset, not yet added to any registry

        Raises:
            InvalidRegistrationError: If a required field is blank
            MalformedIdentifierError: If an existing identifier cannot be parsed
        """
        self.validate(registration)

        asset_id = AssetIDAllocator.next_asset_id(existing_asset_ids)
        return Asset(
            id=self.id_factory(),
            asset_id=asset_id,
            barcode=AssetIDAllocator.barcode_for(asset_id),
            employee_name=registration.employee_name.strip(),
            department=registration.department.strip(),
            employee_type=EmployeeType(registration.employee_type),
            asset_type=registration.asset_type.strip(),
            asset_name=registration.asset_name.strip(),
            serial_number=registration.serial_number or None,
            register_date=as_utc(self.clock()),
            status=AssetStatus.CHECKED_IN,
            notes=registration.notes or None,
        )
