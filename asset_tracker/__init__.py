from typing import Optional

from asset_tracker.business.core.lifecycle.lifecycle_manager import AssetLifecycleManager
from asset_tracker.business.core.tracker_context import AssetTrackerContext
from asset_tracker.config import STORE_MEMORY, TrackerConfig
from asset_tracker.data.core.storage.key_value_store import MemoryKeyValueStore
from asset_tracker.data.core.storage.sqlalchemy_store import SqlAlchemyKeyValueStore
from asset_tracker.utils.logger import get_logger


def create_tracker(config: Optional[TrackerConfig] = None, store=None, clock=None):
    """
    Build an AssetTrackerContext from configuration.

    Args:
        config: Tracker configuration (read from the environment when omitted)
        store: Key-value store to use instead of the configured one
        clock: Callable returning the current aware datetime

    Returns:
        AssetTrackerContext: Loaded tracker state
    """
    logger = get_logger("asset_tracker")
    if config is None:
        config = TrackerConfig.from_env()

    if store is None:
        if config.store == STORE_MEMORY:
            store = MemoryKeyValueStore()
        else:
            store = SqlAlchemyKeyValueStore(config.database_url)
    logger.info(f"Initializing asset tracker with {type(store).__name__}")

    default_assets, default_records = [], []
    if config.seed_sample_data:
        from asset_tracker.debug.sample_data_manager import load_sample_data
        default_assets, default_records = load_sample_data()

    lifecycle = AssetLifecycleManager(clock=clock, strict_checkout=config.strict_checkout)
    return AssetTrackerContext(
        store,
        lifecycle_manager=lifecycle,
        default_assets=default_assets,
        default_records=default_records,
    )
