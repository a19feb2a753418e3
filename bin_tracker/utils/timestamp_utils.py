"""
Timestamp utilities for bin records.
All timestamps are UTC ISO-8601 strings with millisecond precision and a literal 'Z'.
"""
from datetime import datetime, timezone


def format_timestamp(dt: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are assumed to already be UTC.

    Examples:
        >>> format_timestamp(datetime(2025, 9, 1, 18, 5, 10, 123456, tzinfo=timezone.utc))
        '2025-09-01T18:05:10.123Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    """Current UTC time as a millisecond-precision ISO string."""
    return format_timestamp(datetime.now(timezone.utc))
