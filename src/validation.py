"""Form validation run before any remote call."""

from src.utils import parse_date


class ValidationError(ValueError):
    """Invalid form input; raised before anything is written."""


def validate_conference_form(name: str, start_date, end_date, location: str):
    """Check the required conference fields and date order."""
    if not name or not start_date or not end_date or not location:
        raise ValidationError("Please fill in all required fields")
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        raise ValidationError("Dates must be in YYYY-MM-DD format")
    if end < start:
        raise ValidationError("End date must be after start date")


def validate_calendar_event_form(title: str, start_date, end_date=None, start_time=None, end_time=None, all_day=True):
    """Check a calendar event form: title, start date, ordering."""
    if not title or not start_date:
        raise ValidationError("Please fill in all required fields")
    if not all_day and not start_time:
        raise ValidationError("Timed events need a start time")
    start = parse_date(start_date)
    if start is None:
        raise ValidationError("Dates must be in YYYY-MM-DD format")
    if end_date:
        end = parse_date(end_date)
        if end is None:
            raise ValidationError("Dates must be in YYYY-MM-DD format")
        if end < start:
            raise ValidationError("End date must be after start date")
    if start_time and end_time and (not end_date or parse_date(end_date) == start):
        if str(end_time) < str(start_time):
            raise ValidationError("End time must be after start time")


def validate_url(url: str) -> str:
    """Strip and require a non-empty http(s) URL."""
    url = (url or "").strip()
    if not url:
        raise ValidationError("Please enter a valid URL")
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url
