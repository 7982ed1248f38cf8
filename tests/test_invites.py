"""
Unit tests for calendar invite generation and delivery.
"""
import smtplib
from datetime import datetime
from unittest.mock import patch

import pytest
from dateutil import tz

from src.calendar_sync import InviteError, generate_ics, format_date_for_email, send_calendar_invite
from src.calendar_sync.invites import resolve_recipient, send_email_with_ics

NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=tz.UTC)

ALL_DAY_EVENT = {
    "id": "evt-1",
    "user_id": "user-1",
    "title": "Summit, Day 1",
    "start_date": "2025-03-01",
    "end_date": "2025-03-03",
    "all_day": True,
    "description": "Line one\nLine two",
    "location": "Austin; TX",
}

TIMED_EVENT = {
    "id": "evt-2",
    "user_id": "user-1",
    "title": "Prep call",
    "start_date": "2025-03-01",
    "start_time": "14:30",
    "all_day": False,
}


class TestGenerateIcs:
    """Tests for the iCalendar body."""

    def test_all_day_dates_with_exclusive_end(self):
        lines = generate_ics(ALL_DAY_EVENT, "owner@example.com", now=NOW).split("\r\n")
        assert "DTSTART;VALUE=DATE:20250301" in lines
        assert "DTEND;VALUE=DATE:20250304" in lines

    def test_envelope_and_escaping(self):
        ics = generate_ics(ALL_DAY_EVENT, "owner@example.com", now=NOW)
        lines = ics.split("\r\n")
        assert lines[0] == "BEGIN:VCALENDAR"
        assert lines[-1] == "END:VCALENDAR"
        assert "METHOD:REQUEST" in lines
        assert "UID:evt-1@wolfstreet.app" in lines
        assert "DTSTAMP:20250102T030405Z" in lines
        assert "SUMMARY:Summit\\, Day 1" in lines
        assert "DESCRIPTION:Line one\\nLine two" in lines
        assert "LOCATION:Austin\\; TX" in lines
        assert "ORGANIZER:mailto:owner@example.com" in lines

    def test_timed_event_defaults_to_one_hour(self, monkeypatch):
        monkeypatch.setenv("APP_TIMEZONE", "UTC")
        lines = generate_ics(TIMED_EVENT, "owner@example.com", now=NOW).split("\r\n")
        assert "DTSTART:20250301T143000Z" in lines
        assert "DTEND:20250301T153000Z" in lines

    def test_timed_event_converted_to_utc(self, monkeypatch):
        monkeypatch.setenv("APP_TIMEZONE", "America/New_York")
        lines = generate_ics({**TIMED_EVENT, "end_time": "15:00"}, "owner@example.com", now=NOW).split("\r\n")
        assert "DTSTART:20250301T193000Z" in lines
        assert "DTEND:20250301T200000Z" in lines

    def test_missing_all_day_flag_is_all_day(self):
        event = {"id": "evt-3", "title": "Offsite", "start_date": "2025-03-01"}
        lines = generate_ics(event, "owner@example.com", now=NOW).split("\r\n")
        assert "DTSTART;VALUE=DATE:20250301" in lines
        assert "DTEND;VALUE=DATE:20250302" in lines
        assert not any(line.startswith("LOCATION") for line in lines)


class TestFormatDateForEmail:
    """Tests for the human-readable date line."""

    def test_all_day(self):
        assert format_date_for_email(ALL_DAY_EVENT) == "Saturday, March 1, 2025 (All day)"

    def test_timed(self):
        event = {**TIMED_EVENT, "start_time": "09:30", "end_time": "10:30"}
        assert format_date_for_email(event) == "Saturday, March 1, 2025 at 9:30 AM - 10:30 AM"


class TestRecipient:
    """Tests for recipient priority."""

    PROFILE = {"email": "owner@example.com"}

    def test_test_email_wins(self):
        event = {"invite_email": "team@example.com"}
        assert resolve_recipient(event, self.PROFILE, "qa@example.com") == "qa@example.com"

    def test_invite_email_before_profile(self):
        assert resolve_recipient({"invite_email": "team@example.com"}, self.PROFILE) == "team@example.com"

    def test_profile_email_fallback(self):
        assert resolve_recipient({}, self.PROFILE) == "owner@example.com"


class TestSendCalendarInvite:
    """Tests for the invite workflow."""

    @pytest.fixture
    def seeded(self, db):
        db.seed("calendar_events", ALL_DAY_EVENT)
        db.seed("profiles", {"id": "user-1", "email": "owner@example.com", "is_approved": True})
        return db

    def test_sends_to_owner(self, seeded):
        with patch("src.calendar_sync.invites.send_email_with_ics") as send:
            result = send_calendar_invite("evt-1")

        assert result == {"success": True, "recipient": "owner@example.com"}
        to_email, subject, html, ics = send.call_args.args
        assert to_email == "owner@example.com"
        assert subject == "Event: Summit, Day 1"
        assert "Saturday, March 1, 2025 (All day)" in html
        assert "DTSTART;VALUE=DATE:20250301" in ics

    def test_test_email_override(self, seeded):
        with patch("src.calendar_sync.invites.send_email_with_ics"):
            result = send_calendar_invite("evt-1", test_email="qa@example.com")
        assert result["recipient"] == "qa@example.com"

    def test_unknown_event(self, seeded):
        with pytest.raises(InviteError, match="Event not found"):
            send_calendar_invite("missing")

    def test_delivery_failure(self, seeded):
        with patch("src.calendar_sync.invites.send_email_with_ics", side_effect=smtplib.SMTPException("boom")):
            with pytest.raises(InviteError, match="Failed to send email"):
                send_calendar_invite("evt-1")


class TestSendEmailWithIcs:
    """Tests for the SMTP message."""

    def test_not_configured(self, monkeypatch):
        monkeypatch.delenv("SMTP_HOST", raising=False)
        with pytest.raises(InviteError):
            send_email_with_ics("a@example.com", "Subject", "<p>hi</p>", "BEGIN:VCALENDAR")

    def test_attaches_calendar_request(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SMTP_USERNAME", "mailer")
        monkeypatch.setenv("SMTP_PASSWORD", "pw")
        monkeypatch.setenv("EMAIL_FROM_ADDRESS", "Wolf Street <calendar@example.com>")

        with patch("src.calendar_sync.invites.smtplib.SMTP") as smtp:
            send_email_with_ics("a@example.com", "Event: Summit", "<p>hi</p>", "BEGIN:VCALENDAR")

        smtp.assert_called_once_with("smtp.example.com", 587)
        server = smtp.return_value.__enter__.return_value
        server.login.assert_called_once_with("mailer", "pw")
        message = server.send_message.call_args.args[0]
        assert message["To"] == "a@example.com"
        assert message["From"] == "Wolf Street <calendar@example.com>"
        attachment = next(message.iter_attachments())
        assert attachment.get_content_type() == "text/calendar"
        assert attachment.get_filename() == "event.ics"
        assert attachment.get_param("method") == "REQUEST"
