"""
Unit tests for the add/edit conference workflows.
"""
import pytest

from src.config import View
from src.calendar_sync import add_calendar_event, add_conference, edit_calendar_event, edit_conference
from src.validation import ValidationError


class TestAddConference:
    """Tests for create + calendar sync."""

    def test_creates_conference_and_event(self, db, session):
        result = add_conference(
            session, "AWS Summit", "2025-06-10", "2025-06-11", "Washington, DC",
            description="Public sector day", tags="cloud, public sector",
        )

        assert result["warning"] is None
        conference = db.tables["conferences"][0]
        assert conference["tags"] == ["cloud", "public sector"]
        assert conference["created_by"] == "user-1"
        assert conference["calendar_event_id"] == result["calendar_event_id"]
        assert db.row("calendar_events", result["calendar_event_id"])["description"] == "Public sector day"

    def test_validation_error_writes_nothing(self, db, session):
        with pytest.raises(ValidationError):
            add_conference(session, "AWS Summit", "2025-06-11", "2025-06-10", "Washington, DC")
        assert db.calls == []

    def test_calendar_failure_is_warning(self, db, session):
        db.fail("calendar_events", "insert")

        result = add_conference(session, "AWS Summit", "2025-06-10", "2025-06-11", "Washington, DC")

        assert result["warning"] == "Conference created but calendar event failed"
        assert result["calendar_event_id"] is None
        assert len(db.tables["conferences"]) == 1
        assert View.CONFERENCES in session.stale_views


class TestEditConference:
    """Tests for update + mirror onto the linked event."""

    def test_mirrors_changes(self, db, session):
        created = add_conference(session, "AWS Summit", "2025-06-10", "2025-06-11", "Washington, DC")
        conference = db.tables["conferences"][0]

        result = edit_conference(session, conference, {"name": "AWS Summit DC", "tags": "cloud"})

        assert result["warning"] is None
        assert result["conference"]["name"] == "AWS Summit DC"
        assert result["conference"]["tags"] == ["cloud"]
        assert db.row("calendar_events", created["calendar_event_id"])["title"] == "AWS Summit DC"

    def test_unlinked_conference_skips_calendar(self, db, session):
        db.seed("conferences", {
            "id": "conf-1", "name": "Expo", "start_date": "2025-06-10", "end_date": "2025-06-10",
            "location": "Austin, TX", "calendar_event_id": None,
        })

        edit_conference(session, db.row("conferences", "conf-1"), {"location": "Dallas, TX"})

        assert ("calendar_events", "update") not in db.calls

    def test_calendar_failure_is_warning(self, db, session):
        add_conference(session, "AWS Summit", "2025-06-10", "2025-06-11", "Washington, DC")
        db.fail("calendar_events", "update")

        result = edit_conference(session, db.tables["conferences"][0], {"location": "Arlington, VA"})

        assert result["warning"] == "Conference updated but calendar sync failed"
        assert db.tables["conferences"][0]["location"] == "Arlington, VA"

    def test_invalid_edit_rejected(self, db, session):
        db.seed("conferences", {
            "id": "conf-1", "name": "Expo", "start_date": "2025-06-10", "end_date": "2025-06-12",
            "location": "Austin, TX",
        })
        with pytest.raises(ValidationError):
            edit_conference(session, db.row("conferences", "conf-1"), {"end_date": "2025-06-01"})


class TestAddCalendarEvent:
    """Tests for manually created calendar events."""

    FORM = {
        "title": "Customer briefing",
        "start_date": "2025-06-10",
        "end_date": "2025-06-10",
        "all_day": False,
        "start_time": "09:00",
        "end_time": "10:30",
        "location": "  ",
        "event_type": "meeting",
        "type_custom": "ignored",
        "color_hex": "#10B981",
        "icon_name": "briefcase",
        "invite_email": "team@example.com",
    }

    def test_timed_event_stored_for_owner(self, db, session):
        event = add_calendar_event(session, self.FORM)

        stored = db.row("calendar_events", event["id"])
        assert stored["user_id"] == "user-1"
        assert (stored["start_time"], stored["end_time"]) == ("09:00", "10:30")
        assert stored["location"] is None
        assert stored["type_custom"] is None
        assert stored["color_hex"] == "#10B981"
        assert stored["invite_email"] == "team@example.com"
        assert View.CALENDAR_EVENTS in session.stale_views

    def test_custom_type_keeps_label(self, db, session):
        event = add_calendar_event(session, {**self.FORM, "event_type": "custom", "type_custom": "Site visit"})
        assert db.row("calendar_events", event["id"])["type_custom"] == "Site visit"

    def test_all_day_drops_times_and_defaults_type(self, db, session):
        form = {"title": "Budget due", "start_date": "2025-06-30", "all_day": True, "start_time": "09:00"}

        event = add_calendar_event(session, form)

        stored = db.row("calendar_events", event["id"])
        assert stored["start_time"] is None
        assert stored["event_type"] == "meeting"

    def test_timed_without_start_time_rejected(self, db, session):
        with pytest.raises(ValidationError, match="start time"):
            add_calendar_event(session, {**self.FORM, "start_time": None})
        assert db.calls == []


class TestEditCalendarEvent:
    """Tests for editing events, with and without a linked conference."""

    EVENT = {
        "id": "evt-1", "title": "AWS Summit", "start_date": "2025-06-10", "end_date": "2025-06-11",
        "all_day": True, "event_type": "conference", "user_id": "user-1",
    }

    def test_style_fields_updated(self, db, session):
        db.seed("calendar_events", self.EVENT)

        result = edit_calendar_event(session, self.EVENT, {"color_hex": "#EF4444", "icon_name": "star"})

        assert result["warning"] is None
        stored = db.row("calendar_events", "evt-1")
        assert (stored["color_hex"], stored["icon_name"]) == ("#EF4444", "star")

    def test_linked_conference_follows(self, db, session):
        db.seed("calendar_events", self.EVENT)
        db.seed("conferences", {"id": "conf-1", "name": "AWS Summit", "calendar_event_id": "evt-1",
                                "created_by": "user-1"})

        edit_calendar_event(session, self.EVENT, {"title": "AWS Summit DC", "end_date": "2025-06-12"},
                            linked_conference={"id": "conf-1"})

        conference = db.row("conferences", "conf-1")
        assert (conference["name"], conference["end_date"]) == ("AWS Summit DC", "2025-06-12")
        assert View.CONFERENCES in session.stale_views

    def test_switch_to_timed_needs_start_time(self, db, session):
        db.seed("calendar_events", self.EVENT)
        with pytest.raises(ValidationError):
            edit_calendar_event(session, self.EVENT, {"all_day": False})
        assert db.calls == []

    def test_conference_sync_failure_is_warning(self, db, session):
        db.seed("calendar_events", self.EVENT)
        db.fail("conferences", "update")

        result = edit_calendar_event(session, self.EVENT, {"title": "Renamed"}, linked_conference={"id": "conf-1"})

        assert result["warning"] == "Event updated but conference sync failed"
        assert db.row("calendar_events", "evt-1")["title"] == "Renamed"
