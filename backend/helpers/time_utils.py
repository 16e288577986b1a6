"""
Time helpers shared by services and serializers.

SQLite hands back naive datetimes even when timezone-aware values were
written, so anything that compares or serializes timestamps goes through
`as_utc` first.
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def later_of(first: datetime, second: datetime) -> datetime:
    """Return the later of two datetimes, tolerating mixed awareness."""
    return first if as_utc(first) >= as_utc(second) else second


def parse_incident_date(value: str | date | datetime) -> date:
    """
    Parse a submitted incident date down to a calendar day.

    Accepts `YYYY-MM-DD`, full ISO 8601 timestamps (a trailing `Z` included)
    and date/datetime objects. Timestamps are converted to UTC before the
    day is taken.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return as_utc(value).date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        raise ValueError("empty date")

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text)).date()

