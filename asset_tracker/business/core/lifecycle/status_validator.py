"""
Asset Status Validator
Table of allowed asset status transitions.
"""

from typing import Dict, FrozenSet

from asset_tracker.data.core.asset_info.asset import AssetStatus


class AssetStatusValidator:
    """
    Allowed transitions: current status -> statuses it may move to.

    checked-in -> checked-in is allowed so a repeated check-in is harmless.
    checked-out -> checked-out is a re-assignment and is removed in strict mode.
    retired is terminal.
    """

    ALLOWED_TRANSITIONS: Dict[AssetStatus, FrozenSet[AssetStatus]] = {
        AssetStatus.CHECKED_IN: frozenset({
            AssetStatus.CHECKED_IN,
            AssetStatus.CHECKED_OUT,
            AssetStatus.MAINTENANCE,
            AssetStatus.RETIRED,
        }),
        AssetStatus.CHECKED_OUT: frozenset({
            AssetStatus.CHECKED_IN,
            AssetStatus.CHECKED_OUT,
        }),
        AssetStatus.MAINTENANCE: frozenset({
            AssetStatus.CHECKED_IN,
            AssetStatus.RETIRED,
        }),
        AssetStatus.RETIRED: frozenset(),
    }

    def __init__(self, strict_checkout: bool = False):
        self.strict_checkout = strict_checkout

    def can_transition(self, from_status, to_status) -> bool:
        from_status = AssetStatus(from_status)
        to_status = AssetStatus(to_status)
        if (self.strict_checkout
                and from_status == AssetStatus.CHECKED_OUT
                and to_status == AssetStatus.CHECKED_OUT):
            return False
        return to_status in self.ALLOWED_TRANSITIONS[from_status]

    def allowed_targets(self, from_status) -> FrozenSet[AssetStatus]:
        return frozenset(
            status for status in AssetStatus if self.can_transition(from_status, status)
        )
