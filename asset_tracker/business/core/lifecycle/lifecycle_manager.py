from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Tuple

from asset_tracker.business.core.exceptions import InvalidAssigneeError, InvalidTransitionError
from asset_tracker.business.core.lifecycle.status_validator import AssetStatusValidator
from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus
from asset_tracker.data.core.event_info.check_in_out_record import CheckInOutRecord, TransactionAction
from asset_tracker.data.core.serialization import as_utc, utc_now
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.business.lifecycle")


class AssetLifecycleManager:
    """
    Lifecycle state machine for assets.

    This class is responsible for:
    - validating transitions against AssetStatusValidator
    - computing the updated asset (never mutating the input)
    - building the ledger record for check-in and check-out

    Every method validates before building anything, so a rejected call
    returns nothing and leaves no partial state for the caller to apply.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        strict_checkout: bool = False,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.clock = clock or utc_now
        self.validator = AssetStatusValidator(strict_checkout=strict_checkout)
        self.id_factory = id_factory or (lambda: uuid.uuid4().hex)

    def _now(self) -> datetime:
        return as_utc(self.clock())

    def _validate(self, asset: Asset, new_status: AssetStatus) -> None:
        if not self.validator.can_transition(asset.status, new_status):
            logger.warning(
                f"Rejected transition for {asset.asset_id}: {asset.status.value} -> {new_status.value}"
            )
            raise InvalidTransitionError(asset.asset_id, asset.status.value, new_status.value)

    def check_out(
        self,
        asset: Asset,
        assigned_to: Optional[str],
        notes: Optional[str] = None,
    ) -> Tuple[Asset, CheckInOutRecord]:
        """
        Assign an asset to a person.

        Args:
            asset: Current asset state
            assigned_to: Person taking the asset (required)
            notes: Optional notes; replaces the asset's notes when given

        Returns:
            tuple: (updated asset, check-out record)

        Raises:
            InvalidAssigneeError: If assigned_to is missing or blank
            InvalidTransitionError: If the asset cannot be checked out from its status
        """
        assignee = (assigned_to or '').strip()
        if not assignee:
            raise InvalidAssigneeError(f"Check-out of {asset.asset_id} requires an assignee")
        self._validate(asset, AssetStatus.CHECKED_OUT)

        now = self._now()
        updated = replace(
            asset,
            status=AssetStatus.CHECKED_OUT,
            assigned_to=assignee,
            check_out_date=now,
            check_in_date=None,
            notes=notes or asset.notes,
        )
        record = CheckInOutRecord(
            id=self.id_factory(),
            asset_id=asset.asset_id,
            employee_name=assignee,
            action=TransactionAction.CHECK_OUT,
            timestamp=now,
            notes=notes or None,
        )
        return updated, record

    def check_in(self, asset: Asset, notes: Optional[str] = None) -> Tuple[Asset, CheckInOutRecord]:
        """
        Return an asset to available status.

        The record names the asset's registered employee, not the last
        assignee. check_out_date is kept as the date of the last check-out.

        Raises:
            InvalidTransitionError: If the asset is retired
        """
        self._validate(asset, AssetStatus.CHECKED_IN)

        now = self._now()
        updated = replace(
            asset,
            status=AssetStatus.CHECKED_IN,
            assigned_to=None,
            check_in_date=now,
            notes=notes or asset.notes,
        )
        record = CheckInOutRecord(
            id=self.id_factory(),
            asset_id=asset.asset_id,
            employee_name=asset.employee_name,
            action=TransactionAction.CHECK_IN,
            timestamp=now,
            notes=notes or None,
        )
        return updated, record

    def send_to_maintenance(self, asset: Asset, notes: Optional[str] = None) -> Asset:
        """Move an available asset into maintenance (no ledger record)"""
        self._validate(asset, AssetStatus.MAINTENANCE)
        return replace(asset, status=AssetStatus.MAINTENANCE, notes=notes or asset.notes)

    def retire(self, asset: Asset, notes: Optional[str] = None) -> Asset:
        """Permanently take an asset out of service (no ledger record)"""
        self._validate(asset, AssetStatus.RETIRED)
        return replace(asset, status=AssetStatus.RETIRED, notes=notes or asset.notes)
