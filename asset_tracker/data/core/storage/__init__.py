"""
Key-value stores for tracker collections
"""

from asset_tracker.data.core.storage.key_value_store import KeyValueStore, MemoryKeyValueStore
from asset_tracker.data.core.storage.sqlalchemy_store import SqlAlchemyKeyValueStore

__all__ = [
    'KeyValueStore',
    'MemoryKeyValueStore',
    'SqlAlchemyKeyValueStore',
]
