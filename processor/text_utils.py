"""Time and text helpers used to render calendar fields."""
import math
from datetime import datetime, timezone

from processor.exceptions import ParseError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_utc(instant: datetime) -> datetime:
    """Convert to UTC, treating naive datetimes as already UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_instant(text: str) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing 'Z' or a numeric offset. Timestamps without a
    designator are taken as UTC.

    Args:
        text: Timestamp such as '2024-06-01T10:00:00Z'

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ParseError: If the text is not a recognizable date-time
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError(f"Invalid timestamp: {text!r}")

    value = text.strip()
    if value[-1] in ('Z', 'z'):
        value = value[:-1] + '+00:00'

    try:
        instant = datetime.fromisoformat(value)
    except ValueError as e:
        raise ParseError(f"Invalid timestamp: {text!r}") from e

    return as_utc(instant)


def format_calendar_instant(instant: datetime) -> str:
    """Render an instant as YYYYMMDDTHHMMSSZ."""
    instant = as_utc(instant)
    return (
        f"{instant.year:04d}{instant.month:02d}{instant.day:02d}"
        f"T{instant.hour:02d}{instant.minute:02d}{instant.second:02d}Z"
    )


def relative_age(duration_ms: float) -> str:
    """
    Humanize a duration as its largest whole unit, e.g. '3h ago'.

    Each unit is rounded from the already rounded unit below it, so
    89 minutes reads as '1h ago' while 90 minutes reads as '2h ago'.

    Args:
        duration_ms: Elapsed time in milliseconds

    Returns:
        Relative age string
    """
    seconds = _round_half_up(max(duration_ms, 0) / 1000)
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = _round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes}m ago"
    hours = _round_half_up(minutes / 60)
    if hours < 24:
        return f"{hours}h ago"
    days = _round_half_up(hours / 24)
    if days < 7:
        return f"{days}d ago"
    weeks = _round_half_up(days / 7)
    if weeks < 4:
        return f"{weeks}w ago"
    months = _round_half_up(days / 30)
    if months < 12:
        return f"{months}mo ago"
    years = _round_half_up(days / 365)
    return f"{years}y ago"


def escape_calendar_text(text: str) -> str:
    """Escape a TEXT value for RFC 5545 (backslash, comma, semicolon, newline)."""
    return (
        text.replace('\\', '\\\\')
            .replace(',', '\\,')
            .replace(';', '\\;')
            .replace('\r\n', '\\n')
            .replace('\n', '\\n')
    )
