"""Calendar invite emails with an RFC5545 (.ics) attachment."""

import logging
import smtplib
from datetime import datetime, timedelta
from email.message import EmailMessage

from dateutil import tz as dateutil_tz

from src.config import (
    APP_DOMAIN,
    APP_NAME,
    DEFAULT_EVENT_DURATION_MINUTES,
    DEFAULT_FROM_EMAIL,
    ICS_FILENAME,
    ICS_PRODID,
    get_secret,
)
from src.database import get_calendar_event, get_profile
from src.utils import combine_date_time, parse_date

logger = logging.getLogger(__name__)


class InviteError(Exception):
    """The invite could not be built or delivered."""


def _escape_ics(text: str | None) -> str:
    """Escape backslashes, semicolons, commas and newlines for iCalendar text."""
    if not text:
        return ""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r", "")
        .replace("\n", "\\n")
    )


def _format_ics_datetime(value: datetime) -> str:
    """UTC timestamp as YYYYMMDDTHHMMSSZ."""
    return value.astimezone(dateutil_tz.UTC).strftime("%Y%m%dT%H%M%SZ")


def _format_ics_date(value) -> str:
    return parse_date(value).strftime("%Y%m%d")


def is_all_day(event: dict) -> bool:
    """All-day unless explicitly timed with a start time (missing flag means all-day)."""
    all_day = event.get("all_day")
    if all_day is None:
        all_day = True
    return all_day or not event.get("start_time")


def event_time_lines(event: dict) -> tuple:
    """DTSTART and DTEND property lines for an event."""
    if is_all_day(event):
        start = event["start_date"]
        end = event.get("end_date") or start
        # All-day DTEND is exclusive: the day after the last day
        end_exclusive = parse_date(end) + timedelta(days=1)
        return (
            f"DTSTART;VALUE=DATE:{_format_ics_date(start)}",
            f"DTEND;VALUE=DATE:{end_exclusive.strftime('%Y%m%d')}",
        )

    start = combine_date_time(event["start_date"], event["start_time"])
    if event.get("end_time") and event.get("end_date"):
        end = combine_date_time(event["end_date"], event["end_time"])
    elif event.get("end_time"):
        end = combine_date_time(event["start_date"], event["end_time"])
    else:
        end = start + timedelta(minutes=DEFAULT_EVENT_DURATION_MINUTES)
    return f"DTSTART:{_format_ics_datetime(start)}", f"DTEND:{_format_ics_datetime(end)}"


def generate_ics(event: dict, organizer_email: str, now: datetime = None) -> str:
    """Build a single-event VCALENDAR request."""
    now = now or datetime.now(dateutil_tz.UTC)
    dtstart, dtend = event_time_lines(event)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{ICS_PRODID}",
        "METHOD:REQUEST",
        "CALSCALE:GREGORIAN",
        "BEGIN:VEVENT",
        f"UID:{event['id']}@{APP_DOMAIN}",
        f"DTSTAMP:{_format_ics_datetime(now)}",
        dtstart,
        dtend,
        f"SUMMARY:{_escape_ics(event.get('title'))}",
    ]
    if event.get("description"):
        lines.append(f"DESCRIPTION:{_escape_ics(event['description'])}")
    if event.get("location"):
        lines.append(f"LOCATION:{_escape_ics(event['location'])}")
    lines.extend([
        f"ORGANIZER:mailto:{organizer_email}",
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        "END:VEVENT",
        "END:VCALENDAR",
    ])
    return "\r\n".join(lines)


def _format_clock(time_of_day: str) -> str:
    hours, minutes = time_of_day.split(":")[:2]
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def format_date_for_email(event: dict) -> str:
    """Human date line: 'Saturday, March 1, 2025 (All day)' or '... at 9:30 AM - 10:30 AM'."""
    start = parse_date(event["start_date"])
    date_str = f"{start:%A}, {start:%B} {start.day}, {start.year}"
    if not is_all_day(event):
        date_str += f" at {_format_clock(event['start_time'])}"
        if event.get("end_time"):
            date_str += f" - {_format_clock(event['end_time'])}"
    else:
        date_str += " (All day)"
    return date_str


def build_invite_html(event: dict) -> str:
    """HTML body for the invite email."""
    where = f"<p><strong>Where:</strong> {event['location']}</p>" if event.get("location") else ""
    details = f"<p>{event['description']}</p>" if event.get("description") else ""
    return f"""<!DOCTYPE html>
<html>
  <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="font-size: 24px;">New Calendar Event</h1>
    <div style="border-left: 4px solid #3b82f6; padding: 15px; margin-bottom: 20px;">
      <h2 style="font-size: 20px; margin: 0 0 10px 0;">{event['title']}</h2>
      <p><strong>When:</strong> {format_date_for_email(event)}</p>
      {where}
      {details}
    </div>
    <p style="font-size: 14px;">Open the attached calendar invite (<strong>{ICS_FILENAME}</strong>) to add this event to your calendar.</p>
    <p style="color: #6b7280; font-size: 12px;">This invite was sent from {APP_NAME} BD Intelligence Platform.</p>
  </body>
</html>"""


def _smtp_config() -> dict | None:
    host = get_secret("SMTP_HOST")
    if not host:
        return None
    username = get_secret("SMTP_USERNAME")
    return {
        "host": host,
        "port": int(get_secret("SMTP_PORT", "587") or 587),
        "username": username,
        "password": get_secret("SMTP_PASSWORD"),
        "from": get_secret("EMAIL_FROM_ADDRESS") or DEFAULT_FROM_EMAIL,
    }


def send_email_with_ics(to_email: str, subject: str, html: str, ics_content: str):
    """Send an HTML email with the .ics attached over SMTP (STARTTLS)."""
    cfg = _smtp_config()
    if not cfg:
        raise InviteError("Email delivery is not configured (SMTP_HOST missing)")

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = cfg["from"]
    msg["To"] = to_email
    msg.set_content("Open the attached calendar invite to add this event to your calendar.")
    msg.add_alternative(html, subtype="html")
    msg.add_attachment(
        ics_content.encode("utf-8"),
        maintype="text",
        subtype="calendar",
        filename=ICS_FILENAME,
        params={"method": "REQUEST", "charset": "utf-8"},
    )

    with smtplib.SMTP(cfg["host"], cfg["port"]) as server:
        server.starttls()
        if cfg["username"]:
            server.login(cfg["username"], cfg["password"])
        server.send_message(msg)


def resolve_recipient(event: dict, profile: dict, test_email: str = None) -> str:
    """test_email > event.invite_email > owner's profile email."""
    return test_email or event.get("invite_email") or profile["email"]


def send_calendar_invite(event_id: str, test_email: str = None) -> dict:
    """Email the event's invite to its recipient; returns {success, recipient}."""
    event = get_calendar_event(event_id)
    if not event:
        raise InviteError("Event not found")
    profile = get_profile(event["user_id"])
    if not profile:
        raise InviteError("User profile not found")

    recipient = resolve_recipient(event, profile, test_email)
    ics_content = generate_ics(event, profile["email"])
    logger.info("Sending invite for event %s to %s", event_id, recipient)

    try:
        send_email_with_ics(recipient, f"Event: {event['title']}", build_invite_html(event), ics_content)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send invite for event %s: %s", event_id, e)
        raise InviteError(f"Failed to send email: {e}") from e

    return {"success": True, "recipient": recipient}
