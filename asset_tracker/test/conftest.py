"""
Pytest configuration and fixtures for the asset tracker tests
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

# Log files go to a throwaway directory; must be set before the package is imported
os.environ.setdefault('ASSET_TRACKER_LOG_DIR', tempfile.mkdtemp(prefix='asset_tracker_logs_'))

import pytest

from asset_tracker.business.core.factories.asset_factory import AssetRegistration
from asset_tracker.business.core.lifecycle.lifecycle_manager import AssetLifecycleManager
from asset_tracker.business.core.tracker_context import AssetTrackerContext
from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus, EmployeeType
from asset_tracker.data.core.sequences.asset_id_allocator import barcode_for
from asset_tracker.data.core.storage.key_value_store import MemoryKeyValueStore


class FakeClock:
    """Returns a strictly increasing time on every call"""

    def __init__(self, start=None, step=timedelta(minutes=1)):
        self.current = start or datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lifecycle(clock):
    return AssetLifecycleManager(clock=clock)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def tracker(store, clock):
    """Empty tracker over a memory store with a fake clock"""
    return AssetTrackerContext(store, lifecycle_manager=AssetLifecycleManager(clock=clock))


@pytest.fixture
def make_registration():
    def _make(**overrides):
        fields = {
            'employee_name': 'John Smith',
            'department': 'IT Department',
            'asset_type': 'Laptop',
            'asset_name': 'Dell Latitude 7440',
            'employee_type': EmployeeType.EMPLOYEE,
            'serial_number': 'DL-7440-001',
        }
        fields.update(overrides)
        return AssetRegistration(**fields)
    return _make


@pytest.fixture
def make_asset():
    """Build an Asset directly, bypassing the factory"""
    counter = {'n': 0}

    def _make(asset_id=None, **overrides):
        counter['n'] += 1
        asset_id = asset_id or f"TOP-{counter['n']:06d}"
        fields = {
            'id': f"asset-{counter['n']}",
            'asset_id': asset_id,
            'barcode': barcode_for(asset_id),
            'employee_name': 'John Smith',
            'department': 'IT Department',
            'employee_type': EmployeeType.EMPLOYEE,
            'asset_type': 'Computer',
            'asset_name': 'Dell OptiPlex 7090',
            'register_date': datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
            'status': AssetStatus.CHECKED_IN,
        }
        fields.update(overrides)
        return Asset(**fields)
    return _make
