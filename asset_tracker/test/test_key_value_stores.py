"""
Tests for the memory and SQLAlchemy key-value stores
"""
import pytest
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from asset_tracker.business.core.exceptions import PersistenceError
from asset_tracker.data.core.storage import MemoryKeyValueStore, SqlAlchemyKeyValueStore
from asset_tracker.data.core.storage.sqlalchemy_store import KeyValueEntry


@pytest.fixture(params=['memory', 'sqlite'])
def any_store(request, tmp_path):
    if request.param == 'memory':
        yield MemoryKeyValueStore()
    else:
        store = SqlAlchemyKeyValueStore(f"sqlite:///{tmp_path / 'store.db'}")
        yield store
        store.dispose()


def test_missing_key_returns_default(any_store):
    assert any_store.load('assets') is None
    assert any_store.load('assets', []) == []


def test_save_overwrites(any_store):
    any_store.save('assets', [{'asset_id': 'TOP-000001'}])
    any_store.save('assets', [{'asset_id': 'TOP-000002'}])
    assert any_store.load('assets') == [{'asset_id': 'TOP-000002'}]


def test_save_many_writes_all_keys(any_store):
    any_store.save_many({'assets': [1, 2], 'checkInOutRecords': [3]})
    assert any_store.load('assets') == [1, 2]
    assert any_store.load('checkInOutRecords') == [3]


def test_loaded_value_is_a_copy(any_store):
    value = [{'notes': 'original'}]
    any_store.save('assets', value)
    value[0]['notes'] = 'changed'
    assert any_store.load('assets') == [{'notes': 'original'}]


def test_unserializable_value_leaves_store_untouched(any_store):
    any_store.save('assets', ['kept'])
    with pytest.raises(PersistenceError):
        any_store.save_many({'assets': ['replaced'], 'checkInOutRecords': [object()]})
    assert any_store.load('assets') == ['kept']
    assert any_store.load('checkInOutRecords') is None


def test_corrupt_value_raises_persistence_error(any_store):
    any_store.put_raw('assets', '[{"broken": ')
    with pytest.raises(PersistenceError):
        any_store.load('assets')


def test_sqlite_store_persists_across_instances(tmp_path):
    url = f"sqlite:///{tmp_path / 'deep' / 'dir' / 'tracker.db'}"
    first = SqlAlchemyKeyValueStore(url)
    first.save('assets', [{'asset_id': 'TOP-000001'}])
    first.dispose()

    assert (tmp_path / 'deep' / 'dir' / 'tracker.db').exists()

    second = SqlAlchemyKeyValueStore(url)
    assert second.load('assets') == [{'asset_id': 'TOP-000001'}]
    second.dispose()


def test_memory_store_initial_values():
    store = MemoryKeyValueStore({'assets': []})
    assert store.keys() == ['assets']
    assert store.load('assets') == []


def test_sqlite_store_unusable_directory_raises_persistence_error(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory', encoding='utf-8')

    with pytest.raises(PersistenceError):
        SqlAlchemyKeyValueStore(f"sqlite:///{blocker / 'sub' / 'tracker.db'}")


def test_sqlite_save_many_rolls_back_when_second_key_fails(tmp_path):
    store = SqlAlchemyKeyValueStore(f"sqlite:///{tmp_path / 'store.db'}")
    store.save('assets', ['kept'])

    def reject_records(mapper, connection, target):
        if target.key == 'checkInOutRecords':
            raise SQLAlchemyError("insert rejected")

    event.listen(KeyValueEntry, 'before_insert', reject_records)
    try:
        with pytest.raises(PersistenceError):
            store.save_many({'assets': ['replaced'], 'checkInOutRecords': [1]})
    finally:
        event.remove(KeyValueEntry, 'before_insert', reject_records)

    assert store.load('assets') == ['kept']
    assert store.load('checkInOutRecords') is None
    store.dispose()
