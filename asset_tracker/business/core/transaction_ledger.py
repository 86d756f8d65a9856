"""
Transaction Ledger
Append-only history of check-in and check-out events.

Records are not validated against the registry: the ledger is a historical
log and may reference assets whose current state has since changed.
"""

from typing import Iterable, List, Optional, Set, Tuple

from asset_tracker.business.core.exceptions import DuplicateIdentifierError
from asset_tracker.data.core.event_info.check_in_out_record import CheckInOutRecord


class TransactionLedger:

    def __init__(self, records: Optional[Iterable[CheckInOutRecord]] = None):
        self._records: List[CheckInOutRecord] = []
        self._record_ids: Set[str] = set()
        for record in records or ():
            self.append(record)

    def __len__(self):
        return len(self._records)

    def append(self, record: CheckInOutRecord) -> CheckInOutRecord:
        """
        Append a record to the end of the ledger.

        Raises:
            DuplicateIdentifierError: If a record with the same id was already appended
        """
        if record.id in self._record_ids:
            raise DuplicateIdentifierError('record id', record.id)
        self._records.append(record)
        self._record_ids.add(record.id)
        return record

    def all(self) -> Tuple[CheckInOutRecord, ...]:
        return tuple(self._records)

    def recent(self, n: int = 10) -> List[CheckInOutRecord]:
        """
        Get the n most recent records, newest first.

        Records sharing a timestamp keep their insertion order (stable sort).

        Args:
            n: Maximum number of records to return (default: 10)
        """
        if n <= 0:
            return []
        ordered = sorted(self._records, key=lambda record: record.timestamp, reverse=True)
        return ordered[:n]

    def for_asset(self, asset_id: str) -> List[CheckInOutRecord]:
        """History for one asset in insertion order"""
        return [record for record in self._records if record.asset_id == asset_id]
