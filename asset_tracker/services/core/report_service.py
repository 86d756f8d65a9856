"""
Report Service
Aggregate counts over asset and ledger snapshots for dashboards and reports.

Handles:
- Grouped counts (department, asset type, status, employee type)
- Overview, per-department and per-asset-type reports
- Recent registrations and recent ledger activity

All methods are pure functions over the sequences they are given.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus
from asset_tracker.data.core.event_info.check_in_out_record import CheckInOutRecord
from asset_tracker.services.core.asset_search_service import AssetSearchService


class ReportService:
    """
    Service for report and dashboard data.

    Provides methods for:
    - Counting assets grouped by a field
    - Building the overview, department and asset type reports
    - Listing recent assets and records
    """

    GROUPABLE_FIELDS = ('department', 'asset_type', 'status', 'employee_type')

    @staticmethod
    def count_by(assets: Iterable[Asset], field: str) -> Dict[str, int]:
        """
        Count assets grouped by a field, in first-seen order.

        Args:
            assets: Assets to count
            field: One of department, asset_type, status, employee_type

        Returns:
            Dictionary of field value -> count
        """
        if field not in ReportService.GROUPABLE_FIELDS:
            raise ValueError(f"Cannot group assets by '{field}'")
        counts: Dict[str, int] = {}
        for asset in assets:
            key = AssetSearchService.field_value(asset, field)
            counts[key] = counts.get(key, 0) + 1
        return counts

    @staticmethod
    def status_totals(assets: Sequence[Asset]) -> Dict[str, int]:
        """Totals per status, every status present even when zero"""
        totals = {status.value: 0 for status in AssetStatus}
        for asset in assets:
            totals[asset.status.value] += 1
        return totals

    @staticmethod
    def dashboard_summary(assets: Sequence[Asset]) -> Dict[str, int]:
        totals = ReportService.status_totals(assets)
        return {
            'total_assets': len(assets),
            'available': totals[AssetStatus.CHECKED_IN.value],
            'checked_out': totals[AssetStatus.CHECKED_OUT.value],
            'maintenance': totals[AssetStatus.MAINTENANCE.value],
        }

    @staticmethod
    def overview(
        assets: Sequence[Asset],
        department: Optional[str] = None,
        asset_type: Optional[str] = None,
    ) -> Dict:
        """
        Overview report over the assets matching the optional filters.

        Returns:
            Dictionary with total_assets, per-status totals and the
            by_department, by_asset_type and by_employee_type breakdowns
        """
        filtered = AssetSearchService.filter_assets(assets, department=department, asset_type=asset_type)
        report = {'total_assets': len(filtered)}
        report.update(ReportService.status_totals(filtered))
        report['by_department'] = ReportService.count_by(filtered, 'department')
        report['by_asset_type'] = ReportService.count_by(filtered, 'asset_type')
        report['by_employee_type'] = ReportService.count_by(filtered, 'employee_type')
        return report

    @staticmethod
    def _group_report(assets: Sequence[Asset], group_field: str, breakdown_field: str) -> List[Dict]:
        groups = AssetSearchService.distinct_values(assets, group_field)
        rows = []
        for group in groups:
            members = [asset for asset in assets if AssetSearchService.field_value(asset, group_field) == group]
            row = {group_field: group, 'total_assets': len(members)}
            row.update(ReportService.status_totals(members))
            row[f'by_{breakdown_field}'] = ReportService.count_by(members, breakdown_field)
            rows.append(row)
        return rows

    @staticmethod
    def department_report(
        assets: Sequence[Asset],
        department: Optional[str] = None,
        asset_type: Optional[str] = None,
    ) -> List[Dict]:
        """Per-department totals with an asset type breakdown"""
        filtered = AssetSearchService.filter_assets(assets, department=department, asset_type=asset_type)
        return ReportService._group_report(filtered, 'department', 'asset_type')

    @staticmethod
    def asset_type_report(
        assets: Sequence[Asset],
        department: Optional[str] = None,
        asset_type: Optional[str] = None,
    ) -> List[Dict]:
        """Per-asset-type totals with a department breakdown"""
        filtered = AssetSearchService.filter_assets(assets, department=department, asset_type=asset_type)
        return ReportService._group_report(filtered, 'asset_type', 'department')

    @staticmethod
    def recent_assets(assets: Iterable[Asset], n: int = 5) -> List[Asset]:
        """Newest registrations first"""
        ordered = sorted(assets, key=lambda asset: asset.register_date, reverse=True)
        return ordered[:max(n, 0)]

    @staticmethod
    def recent_activity(records: Iterable[CheckInOutRecord], n: int = 50) -> List[CheckInOutRecord]:
        """Newest ledger records first"""
        ordered = sorted(records, key=lambda record: record.timestamp, reverse=True)
        return ordered[:max(n, 0)]
