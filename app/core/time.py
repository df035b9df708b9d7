"""Time utilities for the UTC timestamps stored in the database."""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    Naive values are taken to already be UTC and get UTC tzinfo attached;
    aware values are converted. None passes through.

    Example:
        >>> to_utc(datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2))))
        datetime.datetime(2024, 1, 1, 10, 0, tzinfo=datetime.timezone.utc)
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_z(dt: datetime) -> str:
    """ISO 8601 string with a Z suffix, e.g. '2025-12-23T00:27:07.804867Z'."""
    return to_utc(dt).isoformat().replace("+00:00", "Z")
