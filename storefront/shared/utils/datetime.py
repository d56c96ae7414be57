"""UTC datetime utilities.

All datetime values in the system are timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def utc_now_ms() -> int:
    """Return the current Unix time in milliseconds (used in storage keys)."""
    return int(utc_now().timestamp() * 1000)
