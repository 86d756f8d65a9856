"""
Asset Registry
Authoritative in-memory collection of assets.

Handles:
- Identity uniqueness (id and asset_id)
- Insertion-ordered storage and replacement by identity
- Pure filter queries used by reporting
"""

from typing import Dict, Iterable, List, Optional, Tuple

from asset_tracker.business.core.exceptions import AssetNotFoundError, DuplicateIdentifierError
from asset_tracker.data.core.asset_info.asset import Asset, AssetStatus
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.business.core")


class AssetRegistry:
    """
    Insertion-ordered collection of assets keyed by identity.

    The registry only guards identity; field-level immutability on update
    is enforced by the lifecycle manager that builds the replacement asset.
    """

    def __init__(self, assets: Optional[Iterable[Asset]] = None):
        self._assets: List[Asset] = []
        self._index_by_id: Dict[str, int] = {}
        self._index_by_asset_id: Dict[str, int] = {}
        for asset in assets or ():
            self.add(asset)

    def __len__(self):
        return len(self._assets)

    def __contains__(self, asset_id: str) -> bool:
        return asset_id in self._index_by_asset_id

    def add(self, asset: Asset) -> Asset:
        """
        Append an asset.

        Raises:
            DuplicateIdentifierError: If asset.id or asset.asset_id is already registered
        """
        if asset.id in self._index_by_id:
            raise DuplicateIdentifierError('id', asset.id)
        if asset.asset_id in self._index_by_asset_id:
            raise DuplicateIdentifierError('asset_id', asset.asset_id)

        position = len(self._assets)
        self._assets.append(asset)
        self._index_by_id[asset.id] = position
        self._index_by_asset_id[asset.asset_id] = position
        return asset

    def update_by_identity(self, asset: Asset) -> Asset:
        """
        Replace the stored asset whose id matches asset.id.

        Raises:
            AssetNotFoundError: If no stored asset has that id
            DuplicateIdentifierError: If a changed asset_id belongs to another asset
        """
        position = self._index_by_id.get(asset.id)
        if position is None:
            raise AssetNotFoundError('id', asset.id)

        previous = self._assets[position]
        if previous.asset_id != asset.asset_id:
            if asset.asset_id in self._index_by_asset_id:
                raise DuplicateIdentifierError('asset_id', asset.asset_id)
            del self._index_by_asset_id[previous.asset_id]
            self._index_by_asset_id[asset.asset_id] = position
        self._assets[position] = asset
        return asset

    def all(self) -> Tuple[Asset, ...]:
        """Snapshot of every asset in insertion order"""
        return tuple(self._assets)

    def get(self, id: str) -> Asset:
        position = self._index_by_id.get(id)
        if position is None:
            raise AssetNotFoundError('id', id)
        return self._assets[position]

    def get_by_asset_id(self, asset_id: str) -> Asset:
        position = self._index_by_asset_id.get(asset_id)
        if position is None:
            raise AssetNotFoundError('asset_id', asset_id)
        return self._assets[position]

    def asset_ids(self) -> List[str]:
        return [asset.asset_id for asset in self._assets]

    def by_department(self, department: str) -> List[Asset]:
        return [asset for asset in self._assets if asset.department == department]

    def by_asset_type(self, asset_type: str) -> List[Asset]:
        return [asset for asset in self._assets if asset.asset_type == asset_type]

    def by_status(self, status) -> List[Asset]:
        status = AssetStatus(status)
        return [asset for asset in self._assets if asset.status == status]
