"""
Asset Tracker Context
Owns the registry, the ledger and the store, and is the only place where
tracker state is mutated.

Handles:
- Loading both collections from the key-value store (with fallback defaults)
- Registration through AssetFactory
- Check-in/check-out through AssetLifecycleManager, applying the asset
  update and the ledger append as one unit
- Writing both collections back in a single store call
"""

from typing import Iterable, List, Optional, Tuple

from asset_tracker.business.core.asset_registry import AssetRegistry
from asset_tracker.business.core.exceptions import AssetTrackerError, PersistenceError
from asset_tracker.business.core.factories.asset_factory import AssetFactory, AssetRegistration
from asset_tracker.business.core.lifecycle.lifecycle_manager import AssetLifecycleManager
from asset_tracker.business.core.transaction_ledger import TransactionLedger
from asset_tracker.data.core.asset_info.asset import Asset
from asset_tracker.data.core.event_info.check_in_out_record import CheckInOutRecord
from asset_tracker.data.core.sequences.asset_id_allocator import AssetIDAllocator
from asset_tracker.data.core.storage.key_value_store import KeyValueStore
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.business.core")

ASSETS_KEY = 'assets'
RECORDS_KEY = 'checkInOutRecords'


class AssetTrackerContext:
    """
    Explicit state owner for one tracker instance.

    Transitions follow validate-then-apply: the lifecycle manager builds the
    new asset and record without touching state, then both are applied in
    memory, then both collections are saved together. If saving fails the
    in-memory state stays applied and PersistenceError reaches the caller.
    """

    def __init__(
        self,
        store: KeyValueStore,
        lifecycle_manager: Optional[AssetLifecycleManager] = None,
        asset_factory: Optional[AssetFactory] = None,
        default_assets: Optional[Iterable[Asset]] = None,
        default_records: Optional[Iterable[CheckInOutRecord]] = None,
    ):
        self.store = store
        self.lifecycle = lifecycle_manager or AssetLifecycleManager()
        self.factory = asset_factory or AssetFactory(clock=self.lifecycle.clock)
        self.load_errors: List[PersistenceError] = []

        self._default_assets = list(default_assets or [])
        self._default_records = list(default_records or [])
        self.registry = self._load_registry()
        self.ledger = self._load_ledger()

    # Loading

    def _load_raw(self, key: str):
        try:
            return self.store.load(key, None)
        except PersistenceError as e:
            self._record_load_error(key, e)
            return None

    def _record_load_error(self, key: str, error: Exception) -> None:
        if not isinstance(error, PersistenceError):
            wrapped = PersistenceError(f"Stored collection '{key}' is corrupt: {error}")
            wrapped.__cause__ = error
            error = wrapped
        logger.error(f"Could not load '{key}', falling back to defaults: {error}")
        self.load_errors.append(error)

    def _load_registry(self) -> AssetRegistry:
        raw = self._load_raw(ASSETS_KEY)
        if raw is not None:
            try:
                registry = AssetRegistry(Asset.from_dict(item) for item in raw)
                logger.debug(f"Loaded {len(registry)} assets")
                return registry
            except (AssetTrackerError, KeyError, TypeError, ValueError) as e:
                self._record_load_error(ASSETS_KEY, e)
        return AssetRegistry(self._default_assets)

    def _load_ledger(self) -> TransactionLedger:
        raw = self._load_raw(RECORDS_KEY)
        if raw is not None:
            try:
                ledger = TransactionLedger(CheckInOutRecord.from_dict(item) for item in raw)
                logger.debug(f"Loaded {len(ledger)} check-in/out records")
                return ledger
            except (AssetTrackerError, KeyError, TypeError, ValueError) as e:
                self._record_load_error(RECORDS_KEY, e)
        return TransactionLedger(self._default_records)

    # Persistence

    def save(self) -> None:
        """
        Write assets and records to the store in one call

        Raises:
            PersistenceError: If the store rejects the write
        """
        try:
            self.store.save_many({
                ASSETS_KEY: [asset.to_dict() for asset in self.registry.all()],
                RECORDS_KEY: [record.to_dict() for record in self.ledger.all()],
            })
        except PersistenceError as e:
            logger.error(f"Failed to persist tracker state: {e}")
            raise

    # Read accessors

    @property
    def assets(self) -> Tuple[Asset, ...]:
        return self.registry.all()

    @property
    def records(self) -> Tuple[CheckInOutRecord, ...]:
        return self.ledger.all()

    def get_asset(self, asset_id: str) -> Asset:
        return self.registry.get_by_asset_id(asset_id)

    def recent_records(self, n: int = 10) -> List[CheckInOutRecord]:
        return self.ledger.recent(n)

    def preview_next_asset_id(self) -> str:
        """Identifier the next registration would receive"""
        return AssetIDAllocator.next_asset_id(self.registry.asset_ids())

    # Mutations

    def register_asset(self, registration: AssetRegistration) -> Asset:
        """
        Register a new asset at status checked-in

        Raises:
            InvalidRegistrationError: If a required field is blank
            DuplicateIdentifierError: If the generated identity collides
            PersistenceError: If the asset was registered but could not be saved
        """
        asset = self.factory.create_asset(registration, self.registry.asset_ids())
        self.registry.add(asset)
        logger.info(f"Asset registered: {asset.asset_name} ({asset.asset_id})")
        self.save()
        return asset

    def _apply_transition(self, updated: Asset, record: Optional[CheckInOutRecord] = None) -> None:
        previous = self.registry.get(updated.id)
        self.registry.update_by_identity(updated)
        if record is not None:
            try:
                self.ledger.append(record)
            except Exception:
                self.registry.update_by_identity(previous)
                logger.error(f"Ledger append failed for {updated.asset_id}, asset update reverted")
                raise
        self.save()

    def check_out(
        self,
        asset_id: str,
        assigned_to: str,
        notes: Optional[str] = None,
    ) -> Tuple[Asset, CheckInOutRecord]:
        """
        Check an asset out to a person

        Args:
            asset_id: Human-facing identifier (TOP-NNNNNN)
            assigned_to: Person receiving the asset
            notes: Optional notes for the asset and the record

        Returns:
            tuple: (updated asset, ledger record)
        """
        asset = self.registry.get_by_asset_id(asset_id)
        updated, record = self.lifecycle.check_out(asset, assigned_to, notes)
        self._apply_transition(updated, record)
        logger.info(f"Asset checked out: {asset_id} to {updated.assigned_to}")
        return updated, record

    def check_in(self, asset_id: str, notes: Optional[str] = None) -> Tuple[Asset, CheckInOutRecord]:
        """Check an asset back in; returns (updated asset, ledger record)"""
        asset = self.registry.get_by_asset_id(asset_id)
        updated, record = self.lifecycle.check_in(asset, notes)
        self._apply_transition(updated, record)
        logger.info(f"Asset checked in: {asset_id}")
        return updated, record

    def send_to_maintenance(self, asset_id: str, notes: Optional[str] = None) -> Asset:
        asset = self.registry.get_by_asset_id(asset_id)
        updated = self.lifecycle.send_to_maintenance(asset, notes)
        self._apply_transition(updated)
        logger.info(f"Asset sent to maintenance: {asset_id}")
        return updated

    def retire(self, asset_id: str, notes: Optional[str] = None) -> Asset:
        asset = self.registry.get_by_asset_id(asset_id)
        updated = self.lifecycle.retire(asset, notes)
        self._apply_transition(updated)
        logger.info(f"Asset retired: {asset_id}")
        return updated
