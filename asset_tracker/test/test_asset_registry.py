"""
Tests for the asset registry
"""
from dataclasses import replace

import pytest

from asset_tracker.business.core.asset_registry import AssetRegistry
from asset_tracker.business.core.exceptions import AssetNotFoundError, DuplicateIdentifierError
from asset_tracker.data.core.asset_info.asset import AssetStatus


def test_add_preserves_insertion_order(make_asset):
    registry = AssetRegistry()
    first = registry.add(make_asset("TOP-000002"))
    second = registry.add(make_asset("TOP-000001"))

    assert registry.all() == (first, second)
    assert registry.asset_ids() == ["TOP-000002", "TOP-000001"]
    assert len(registry) == 2
    assert "TOP-000001" in registry


def test_add_rejects_duplicate_id(make_asset):
    registry = AssetRegistry([make_asset("TOP-000001", id="same")])

    with pytest.raises(DuplicateIdentifierError) as excinfo:
        registry.add(make_asset("TOP-000002", id="same"))

    assert excinfo.value.field == 'id'
    assert len(registry) == 1
    assert "TOP-000002" not in registry


def test_add_rejects_duplicate_asset_id(make_asset):
    registry = AssetRegistry([make_asset("TOP-000001")])

    with pytest.raises(DuplicateIdentifierError) as excinfo:
        registry.add(make_asset("TOP-000001"))

    assert excinfo.value.field == 'asset_id'
    assert len(registry) == 1


def test_constructor_rejects_duplicates(make_asset):
    with pytest.raises(DuplicateIdentifierError):
        AssetRegistry([make_asset("TOP-000001"), make_asset("TOP-000001")])


def test_update_by_identity_replaces_in_place(make_asset):
    registry = AssetRegistry()
    first = registry.add(make_asset("TOP-000001"))
    registry.add(make_asset("TOP-000002"))

    updated = replace(first, status=AssetStatus.CHECKED_OUT, assigned_to="Jane Doe")
    registry.update_by_identity(updated)

    assert registry.all()[0] is updated
    assert registry.get(first.id).assigned_to == "Jane Doe"
    assert registry.get_by_asset_id("TOP-000001") is updated


def test_update_by_identity_unknown_asset(make_asset):
    registry = AssetRegistry([make_asset("TOP-000001")])
    stranger = make_asset("TOP-000099")

    with pytest.raises(AssetNotFoundError):
        registry.update_by_identity(stranger)

    assert registry.asset_ids() == ["TOP-000001"]


def test_update_cannot_take_another_assets_identifier(make_asset):
    registry = AssetRegistry()
    first = registry.add(make_asset("TOP-000001"))
    registry.add(make_asset("TOP-000002"))

    with pytest.raises(DuplicateIdentifierError):
        registry.update_by_identity(replace(first, asset_id="TOP-000002"))


def test_not_found_is_a_lookup_error(make_asset):
    registry = AssetRegistry()
    with pytest.raises(LookupError):
        registry.get_by_asset_id("TOP-000001")
    with pytest.raises(AssetNotFoundError):
        registry.get("missing")


def test_all_is_a_snapshot(make_asset):
    registry = AssetRegistry([make_asset("TOP-000001")])
    snapshot = registry.all()
    registry.add(make_asset("TOP-000002"))

    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


def test_query_filters(make_asset):
    registry = AssetRegistry([
        make_asset("TOP-000001", department="Finance", asset_type="Laptop"),
        make_asset("TOP-000002", department="Marketing", asset_type="Laptop",
                   status=AssetStatus.MAINTENANCE),
        make_asset("TOP-000003", department="Finance", asset_type="Monitor"),
    ])

    assert [a.asset_id for a in registry.by_department("Finance")] == ["TOP-000001", "TOP-000003"]
    assert [a.asset_id for a in registry.by_asset_type("Laptop")] == ["TOP-000001", "TOP-000002"]
    assert [a.asset_id for a in registry.by_status("maintenance")] == ["TOP-000002"]
    assert registry.by_status(AssetStatus.RETIRED) == []
