"""
UTC datetime utilities for consistent timezone handling.

The document store keeps times as epoch milliseconds (server timestamps).
Use these helpers to move between that representation and aware datetimes.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def to_timestamp_ms(dt: datetime) -> int:
    """Return epoch milliseconds for an aware datetime (naive is taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)
