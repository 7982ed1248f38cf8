"""Shared date helpers for calendar and conference records."""

from datetime import date, datetime, time, timedelta

from dateutil import parser as date_parser
from dateutil import tz as dateutil_tz

from src.config import get_secret


def parse_date(value) -> date | None:
    """Parse a 'YYYY-MM-DD' (or full ISO) value into a date, local and tz-free.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        if "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return date.fromisoformat(value)
    except ValueError:
        return None


def to_iso_date(value: date) -> str:
    """Format a date as 'YYYY-MM-DD'."""
    return value.strftime("%Y-%m-%d")


def shift_date(value: str, days: int) -> str:
    """Add (or subtract, when negative) whole days to a 'YYYY-MM-DD' string."""
    return to_iso_date(parse_date(value) + timedelta(days=days))


def parse_time(value) -> time | None:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time; None for empty or bad input."""
    if not value:
        return None
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(value)
    except ValueError:
        return None


def format_short_date(value) -> str:
    """Format as 'Jun 9' (month abbreviation, day without padding)."""
    d = parse_date(value)
    return f"{d:%b} {d.day}"


def safe_format(value, fmt: str, fallback: str = "—") -> str:
    """strftime that never raises; returns fallback for missing/invalid dates."""
    d = parse_date(value)
    if d is None:
        return fallback
    return d.strftime(fmt)


def days_ago(days: int, today: date = None) -> str:
    """ISO date `days` before today."""
    today = today or date.today()
    return to_iso_date(today - timedelta(days=days))


def parse_tags(raw: str) -> list | None:
    """Split a comma-separated tag string; None when nothing remains."""
    tags = [t.strip() for t in (raw or "").split(",") if t.strip()]
    return tags or None


def event_timezone():
    """Timezone wall-clock event times are entered in (APP_TIMEZONE, default UTC)."""
    return dateutil_tz.gettz(get_secret("APP_TIMEZONE", "UTC")) or dateutil_tz.UTC


def combine_date_time(day: str, time_of_day: str) -> datetime:
    """Aware datetime for a date plus a wall-clock time in the event timezone."""
    value = date_parser.parse(f"{day} {time_of_day}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=event_timezone())
    return value
