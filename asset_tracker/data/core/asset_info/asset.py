from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from asset_tracker.data.core.serialization import format_timestamp, parse_timestamp


class AssetStatus(str, Enum):
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class EmployeeType(str, Enum):
    EMPLOYEE = "employee"
    GUEST = "guest"


_TIMESTAMP_FIELDS = ('register_date', 'check_out_date', 'check_in_date')


@dataclass(frozen=True)
class Asset:
    """
    One physical item under management.

    Instances are immutable; lifecycle transitions build a new Asset with
    dataclasses.replace and the registry swaps it in by ``id``.
    """
    id: str
    asset_id: str
    barcode: str
    employee_name: str
    department: str
    employee_type: EmployeeType
    asset_type: str
    asset_name: str
    register_date: datetime
    status: AssetStatus = AssetStatus.CHECKED_IN
    serial_number: Optional[str] = None
    assigned_to: Optional[str] = None
    check_out_date: Optional[datetime] = None
    check_in_date: Optional[datetime] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary"""
        data = asdict(self)
        data['employee_type'] = self.employee_type.value
        data['status'] = self.status.value
        for field_name in _TIMESTAMP_FIELDS:
            data[field_name] = format_timestamp(data[field_name])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Asset':
        """
        Build an Asset from a dictionary produced by to_dict().

        Raises:
            KeyError: If a required field is missing
            ValueError: If an enum value or timestamp is invalid, or the
                status disagrees with assigned_to / check_out_date
        """
        asset = cls(
            id=str(data['id']),
            asset_id=data['asset_id'],
            barcode=data['barcode'],
            employee_name=data['employee_name'],
            department=data['department'],
            employee_type=EmployeeType(data['employee_type']),
            asset_type=data['asset_type'],
            asset_name=data['asset_name'],
            register_date=parse_timestamp(data['register_date']),
            status=AssetStatus(data.get('status', AssetStatus.CHECKED_IN.value)),
            serial_number=data.get('serial_number'),
            assigned_to=data.get('assigned_to'),
            check_out_date=parse_timestamp(data.get('check_out_date')),
            check_in_date=parse_timestamp(data.get('check_in_date')),
            notes=data.get('notes'),
        )
        asset._check_assignment()
        return asset

    def _check_assignment(self) -> None:
        if self.status == AssetStatus.CHECKED_OUT:
            if not self.assigned_to or self.check_out_date is None:
                raise ValueError(f"{self.asset_id} is checked out without an assignee and check-out date")
        elif self.status == AssetStatus.CHECKED_IN and self.assigned_to:
            raise ValueError(f"{self.asset_id} is checked in but still assigned to {self.assigned_to}")

    def __repr__(self):
        return f'<Asset {self.asset_id} {self.asset_name} ({self.status.value})>'
