"""
Key-Value Store Base Class
Persistence boundary for the tracker: whole collections are loaded and
saved under string keys, with no partial or merge semantics.
"""

import json
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict

from asset_tracker.business.core.exceptions import PersistenceError
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.data.storage")


class KeyValueStore(ABC):
    """
    Abstract base class for collection stores

    Subclasses implement load and save_many; save is a single-key save_many.
    """

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        """
        Load the value stored under key

        Args:
            key: Collection key
            default: Returned when nothing is stored under key

        Returns:
            The stored value, or default

        Raises:
            PersistenceError: If the store is unavailable or the value is corrupt
        """
        pass

    @abstractmethod
    def save_many(self, items: Dict[str, Any]) -> None:
        """
        Overwrite several keys in one write: either every key is stored or none is

        Raises:
            PersistenceError: If the write fails
        """
        pass

    def save(self, key: str, value: Any) -> None:
        """Overwrite the value stored under key"""
        self.save_many({key: value})

    @staticmethod
    def _encode(key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value for key '{key}' is not JSON serializable: {e}") from e

    @staticmethod
    def _decode(key: str, raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Stored value for key '{key}' is corrupt: {e}") from e


class MemoryKeyValueStore(KeyValueStore):
    """
    In-process store holding JSON text per key

    Values are serialized on save and parsed on load, so callers never share
    mutable objects with the store.
    """

    def __init__(self, initial: Dict[str, Any] = None):
        self._lock = threading.Lock()
        self._data: Dict[str, str] = {}
        if initial:
            self.save_many(initial)

    def load(self, key: str, default: Any = None) -> Any:
        with self._lock:
            raw = self._data.get(key)
        if raw is None:
            logger.debug(f"No stored value for key '{key}', using default")
            return default
        return self._decode(key, raw)

    def save_many(self, items: Dict[str, Any]) -> None:
        # Encode everything first so a bad value leaves the store untouched
        encoded = {key: self._encode(key, value) for key, value in items.items()}
        with self._lock:
            self._data.update(encoded)
        logger.debug(f"Saved keys: {', '.join(encoded)}")

    def put_raw(self, key: str, raw: str) -> None:
        """Store raw text under key without encoding (used to simulate legacy or damaged data)"""
        with self._lock:
            self._data[key] = raw

    def keys(self):
        with self._lock:
            return list(self._data)
