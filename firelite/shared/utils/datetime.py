"""
UTC datetime utilities for consistent timezone handling.

All datetime values sent to or read from Firestore are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

import re
from datetime import UTC, datetime

# RFC 3339 as emitted by Firestore: fractional seconds up to nanoseconds.
_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})$"
)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def format_rfc3339(dt: datetime) -> str:
    """
    Format a datetime as an RFC 3339 UTC string with microseconds.

    Naive datetimes are treated as UTC.

    Args:
        dt: Datetime to format

    Returns:
        String like 2024-01-31T12:00:00.000000Z
    """
    # %Y is not zero-padded below year 1000 on every platform.
    dt = ensure_utc(dt)
    return f"{dt.year:04d}-{dt:%m-%dT%H:%M:%S}.{dt.microsecond:06d}Z"


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a UTC-aware datetime.

    Fractional seconds beyond microseconds (Firestore returns nanoseconds)
    are truncated.

    Args:
        value: Timestamp string, e.g. 2024-01-31T12:00:00.123456789Z

    Returns:
        UTC-aware datetime

    Raises:
        ValueError: If the string is not an RFC 3339 timestamp
    """
    match = _RFC3339_RE.match(value)
    if not match:
        raise ValueError(f"Invalid RFC 3339 timestamp: {value!r}")
    frac = (match.group("frac") or "")[:6].ljust(6, "0")
    tz = match.group("tz")
    tz = "+00:00" if tz in ("Z", "z") else tz
    base = match.group("base").replace("t", "T").replace(" ", "T")
    return datetime.fromisoformat(f"{base}.{frac}{tz}").astimezone(UTC)
