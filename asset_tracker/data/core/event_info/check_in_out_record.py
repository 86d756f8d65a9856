from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from asset_tracker.data.core.serialization import format_timestamp, parse_timestamp


class TransactionAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


@dataclass(frozen=True)
class CheckInOutRecord:
    """Immutable ledger entry for one check-in or check-out"""
    id: str
    asset_id: str
    employee_name: str
    action: TransactionAction
    timestamp: datetime
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'asset_id': self.asset_id,
            'employee_name': self.employee_name,
            'action': self.action.value,
            'timestamp': format_timestamp(self.timestamp),
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CheckInOutRecord':
        return cls(
            id=str(data['id']),
            asset_id=data['asset_id'],
            employee_name=data['employee_name'],
            action=TransactionAction(data['action']),
            timestamp=parse_timestamp(data['timestamp']),
            notes=data.get('notes'),
        )

    def __repr__(self):
        return f'<CheckInOutRecord {self.action.value} {self.asset_id} by {self.employee_name}>'
