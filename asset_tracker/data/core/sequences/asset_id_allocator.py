"""
Asset ID Allocator
Derives the next human-facing asset identifier (TOP-NNNNNN) from the
identifiers already in the registry.

Allocation is based on the highest numeric suffix observed, never on a count,
so gaps are never refilled.
"""

from typing import Iterable

from asset_tracker.business.core.exceptions import MalformedIdentifierError


class AssetIDAllocator:
    """
    Sequence generator for asset identifiers.

    Unlike a database-backed sequence there is no counter table: the next
    value is always recomputed from the current asset collection.
    """

    PREFIX = "TOP"
    SEPARATOR = "-"
    WIDTH = 6

    @classmethod
    def format_asset_id(cls, number: int) -> str:
        """Render a sequence number as an asset identifier"""
        return f"{cls.PREFIX}{cls.SEPARATOR}{number:0{cls.WIDTH}d}"

    @classmethod
    def parse_number(cls, asset_id: str) -> int:
        """
        Parse the numeric suffix of an asset identifier.

        Args:
            asset_id: Identifier such as "TOP-000042"

        Returns:
            int: The numeric suffix (42)

        Raises:
            MalformedIdentifierError: If the prefix or suffix is not valid
        """
        if not isinstance(asset_id, str):
            raise MalformedIdentifierError(asset_id)
        prefix, separator, suffix = asset_id.partition(cls.SEPARATOR)
        if prefix != cls.PREFIX or not separator:
            raise MalformedIdentifierError(asset_id)
        if not suffix or not (suffix.isascii() and suffix.isdigit()):
            raise MalformedIdentifierError(asset_id)
        return int(suffix)

    @classmethod
    def next_asset_id(cls, existing_ids: Iterable[str]) -> str:
        """
        Get the identifier following the numerically highest existing one.

        Args:
            existing_ids: Asset identifiers in any order

        Returns:
            str: "TOP-000001" when there are none, otherwise max + 1
        """
        highest = 0
        for asset_id in existing_ids:
            highest = max(highest, cls.parse_number(asset_id))
        return cls.format_asset_id(highest + 1)

    @classmethod
    def barcode_for(cls, asset_id: str) -> str:
        """Scanner-friendly form of an identifier, separator removed"""
        return asset_id.replace(cls.SEPARATOR, "", 1)


def next_asset_id(existing_ids: Iterable[str]) -> str:
    return AssetIDAllocator.next_asset_id(existing_ids)


def barcode_for(asset_id: str) -> str:
    return AssetIDAllocator.barcode_for(asset_id)


def parse_asset_id_number(asset_id: str) -> int:
    return AssetIDAllocator.parse_number(asset_id)
