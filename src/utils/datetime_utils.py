"""DateTime utilities for the profiling server.

Timezone-aware helpers so every stored and serialized timestamp is UTC.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        datetime: Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from MongoDB.

    Args:
        dt: Datetime that may lack timezone info

    Returns:
        Optional[datetime]: Timezone-aware datetime, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_iso(dt: datetime) -> str:
    """Format datetime to ISO string.

    Args:
        dt: DateTime object to format

    Returns:
        str: ISO formatted datetime string
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
