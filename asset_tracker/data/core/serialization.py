"""
Timestamp helpers shared by the asset and ledger models.
Stored collections keep timestamps as ISO-8601 strings.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a clock reading to an aware UTC datetime.
    Naive values are read as local time, the way datetime.now() returns them.
    """
    if value.tzinfo is None:
        return value.astimezone(timezone.utc)
    return value


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp, accepting the trailing "Z" form.
    Naive values are treated as UTC.

    Raises:
        ValueError: If the value is not a valid timestamp
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
