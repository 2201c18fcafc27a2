"""Timezone utilities. Everything stored by dynamodb_orm is UTC."""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert datetime to UTC.

    Naive datetimes are assumed to already be in UTC.

    Examples:
        >>> to_utc(datetime(2024, 1, 1, 10, 0))  # -> 2024-01-01 10:00:00+00:00
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime) -> str:
    """Format datetime as a UTC ISO string with millisecond precision.

    Example:
        >>> format_iso(datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))
        '2024-01-01T10:00:00.000Z'
    """
    return to_utc(dt).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_iso(iso_string: str) -> datetime:
    """Parse an ISO datetime string into an aware UTC datetime.

    Raises:
        ValueError: If the string is not a valid ISO datetime
    """
    return to_utc(datetime.fromisoformat(iso_string.replace('Z', '+00:00')))
