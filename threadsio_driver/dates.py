"""
Wire timestamp formatting.

Threads.io expects UTC ISO-8601 timestamps with a literal ".000Z" suffix,
e.g. "2016-03-01T14:05:09.000Z".
See https://docs.threads.io/docs/threads-timestamp-format
"""

from datetime import datetime, timezone

UTC_OFFSET = "+00:00"
WIRE_SUFFIX = ".000Z"


def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_date(value: datetime) -> str:
    """
    Format an aware datetime as a wire timestamp.

    Args:
        value: Timezone-aware datetime (any offset)

    Returns:
        UTC timestamp with seconds precision and a ".000Z" suffix

    Raises:
        ValueError: If value is naive (no tzinfo)

    Example:
        >>> format_date(datetime(2016, 3, 1, 14, 5, 9, tzinfo=timezone.utc))
        '2016-03-01T14:05:09.000Z'
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")

    normalized = value.astimezone(timezone.utc).replace(microsecond=0)
    return normalized.isoformat().replace(UTC_OFFSET, WIRE_SUFFIX)
