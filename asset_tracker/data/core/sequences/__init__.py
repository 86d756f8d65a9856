"""
Sequence ID Managers
Allocation of human-facing asset identifiers
"""

from asset_tracker.data.core.sequences.asset_id_allocator import (
    AssetIDAllocator,
    barcode_for,
    next_asset_id,
    parse_asset_id_number,
)

__all__ = [
    'AssetIDAllocator',
    'barcode_for',
    'next_asset_id',
    'parse_asset_id_number',
]
