"""
Asset Search Service
Search and filter helpers for asset lists.
"""

from enum import Enum
from typing import Iterable, List, Optional

from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus


class AssetSearchService:

    SEARCHABLE_FIELDS = ('asset_name', 'asset_id', 'employee_name', 'department')

    @staticmethod
    def field_value(asset: Asset, field: str):
        """Attribute value with enums reduced to their string value"""
        value = getattr(asset, field)
        return value.value if isinstance(value, Enum) else value

    @staticmethod
    def matches_search(asset: Asset, search_term: Optional[str]) -> bool:
        if not search_term:
            return True
        term = search_term.lower()
        return any(
            term in (getattr(asset, field) or '').lower()
            for field in AssetSearchService.SEARCHABLE_FIELDS
        )

    @staticmethod
    def filter_assets(
        assets: Iterable[Asset],
        search_term: Optional[str] = None,
        asset_type: Optional[str] = None,
        department: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Asset]:
        """
        Filter assets, keeping their order.

        Args:
            assets: Assets to filter
            search_term: Case-insensitive substring of name, asset id, employee or department
            asset_type: Exact asset type
            department: Exact department
            status: Exact status

        Returns:
            List of matching assets
        """
        wanted_status = AssetStatus(status) if status else None
        results = []
        for asset in assets:
            if asset_type and asset.asset_type != asset_type:
                continue
            if department and asset.department != department:
                continue
            if wanted_status and asset.status != wanted_status:
                continue
            if not AssetSearchService.matches_search(asset, search_term):
                continue
            results.append(asset)
        return results

    @staticmethod
    def distinct_values(assets: Iterable[Asset], field: str) -> List[str]:
        """Distinct values of a field in first-seen order (for filter selectors)"""
        seen = []
        for asset in assets:
            value = AssetSearchService.field_value(asset, field)
            if value not in seen:
                seen.append(value)
        return seen
