"""
SQLAlchemy Key-Value Store
Persists tracker collections as JSON text rows in a single table.

For SQLite the database file lives under instance/ in the working directory
unless ASSET_TRACKER_DATABASE_URL points elsewhere.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from asset_tracker.business.core.exceptions import PersistenceError
from asset_tracker.data.core.storage.key_value_store import KeyValueStore
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.data.storage")

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    __tablename__ = 'key_value_entries'

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f'<KeyValueEntry {self.key}>'


class SqlAlchemyKeyValueStore(KeyValueStore):
    """
    Store backed by any SQLAlchemy-supported database

    save_many writes every key inside one session transaction and rolls back
    on failure, so the assets and ledger collections are committed together.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        try:
            self._ensure_sqlite_directory(database_url)
            self.engine = create_engine(database_url, echo=echo)
            Base.metadata.create_all(self.engine)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Could not open key-value store at {database_url}: {e}")
            raise PersistenceError(f"Could not open key-value store: {e}") from e
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        logger.debug(f"Key-value store ready at {database_url}")

    @staticmethod
    def _ensure_sqlite_directory(database_url: str) -> None:
        url = make_url(database_url)
        if url.get_backend_name() != 'sqlite':
            return
        database = url.database
        if not database or database == ':memory:' or database.startswith('file:'):
            return
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    def load(self, key: str, default: Any = None) -> Any:
        try:
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                raw = entry.value if entry is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load key '{key}': {e}")
            raise PersistenceError(f"Failed to load key '{key}': {e}") from e

        if raw is None:
            logger.debug(f"No stored value for key '{key}', using default")
            return default
        return self._decode(key, raw)

    def save_many(self, items: Dict[str, Any]) -> None:
        encoded = {key: self._encode(key, value) for key, value in items.items()}
        with self._session_factory() as session:
            try:
                for key, raw in encoded.items():
                    entry = session.get(KeyValueEntry, key)
                    if entry is None:
                        session.add(KeyValueEntry(key=key, value=raw))
                    else:
                        entry.value = raw
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Failed to save keys {', '.join(encoded)}: {e}")
                raise PersistenceError(f"Failed to save keys: {e}") from e
        logger.debug(f"Saved keys: {', '.join(encoded)}")

    def put_raw(self, key: str, raw: str) -> None:
        """Store raw text under key without encoding"""
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=raw))
            else:
                entry.value = raw
            session.commit()

    def dispose(self) -> None:
        self.engine.dispose()
