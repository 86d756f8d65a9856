"""
Asset Tracker Errors
Typed failures raised by the core asset lifecycle and identity operations.

Each error also derives from the builtin it specializes (ValueError or
LookupError) so callers written against plain builtins keep working.
"""


class AssetTrackerError(Exception):
    """Base class for all asset tracker errors"""


class DuplicateIdentifierError(AssetTrackerError, ValueError):
    """An asset or record identity is already present"""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate {field}: '{value}' already exists")


class AssetNotFoundError(AssetTrackerError, LookupError):
    """No asset matches the requested identity"""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"No asset with {field} '{value}'")


class InvalidAssigneeError(AssetTrackerError, ValueError):
    """Check-out attempted without a person to assign the asset to"""


class MalformedIdentifierError(AssetTrackerError, ValueError):
    """An asset identifier does not have a parsable numeric suffix"""

    def __init__(self, asset_id):
        self.asset_id = asset_id
        super().__init__(f"Malformed asset identifier: {asset_id!r}")


class InvalidTransitionError(AssetTrackerError, ValueError):
    """A status change is not allowed from the asset's current status"""

    def __init__(self, asset_id: str, from_status, to_status):
        self.asset_id = asset_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid status transition for asset {asset_id}: {from_status} -> {to_status}"
        )


class InvalidRegistrationError(AssetTrackerError, ValueError):
    """A required registration field is missing or blank"""


class PersistenceError(AssetTrackerError):
    """The backing key-value store is unavailable or holds corrupt data"""
