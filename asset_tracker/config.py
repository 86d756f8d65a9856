"""
Tracker configuration read from the environment (.env is loaded first).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

STORE_SQLITE = 'sqlite'
STORE_MEMORY = 'memory'


def _env_flag(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).lower() in ('true', '1', 'yes', 'on')


def default_database_url() -> str:
    # SQLite file under instance/ of the directory the process runs in
    instance_dir = Path.cwd() / 'instance'
    default_db_path = instance_dir / 'asset_tracker.db'
    return f"sqlite:///{str(default_db_path.resolve())}"


@dataclass(frozen=True)
class TrackerConfig:
    store: str = STORE_SQLITE
    database_url: Optional[str] = None
    strict_checkout: bool = False
    seed_sample_data: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> 'TrackerConfig':
        """
        Build a config from environment variables

        Args:
            env: Mapping to read instead of os.environ
            load_env_file: Whether to load a .env file into os.environ first
        """
        if load_env_file:
            load_dotenv()
        if env is None:
            env = os.environ

        store = env.get('ASSET_TRACKER_STORE', STORE_SQLITE).strip().lower()
        if store not in (STORE_SQLITE, STORE_MEMORY):
            raise ValueError(f"ASSET_TRACKER_STORE must be '{STORE_SQLITE}' or '{STORE_MEMORY}', got '{store}'")

        return cls(
            store=store,
            database_url=env.get('ASSET_TRACKER_DATABASE_URL') or default_database_url(),
            strict_checkout=_env_flag(env, 'ASSET_TRACKER_STRICT_CHECKOUT', 'False'),
            seed_sample_data=_env_flag(env, 'ASSET_TRACKER_SEED_SAMPLE_DATA', 'False'),
        )
