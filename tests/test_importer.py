"""
Unit tests for promoting calendar events to conferences.
"""
from datetime import date

import pytest

from src.config import View
from src.calendar_sync import (
    looks_like_conference,
    filter_import_candidates,
    fetch_import_candidates,
    import_calendar_events,
)
from src.calendar_sync.importer import conference_from_calendar_event
from src.validation import ValidationError
from tests.fake_supabase import FakeAPIError


class TestLooksLikeConference:
    """Tests for the conference heuristic."""

    @pytest.mark.parametrize("title", [
        "AWS Summit Washington DC",
        "I/ITSEC 2025",
        "Modern Day Marine EXPO",
        "Space Symposium",
        "Leadership Forum",
    ])
    def test_keyword_titles(self, title):
        assert looks_like_conference({"title": title, "event_type": "meeting"})

    def test_conference_event_type(self):
        assert looks_like_conference({"title": "Team offsite", "event_type": "conference"})

    def test_legacy_type_column(self):
        assert looks_like_conference({"title": "Team offsite", "type": "conference"})

    def test_ordinary_meeting(self):
        assert not looks_like_conference({"title": "Weekly sync", "event_type": "meeting"})
        assert not looks_like_conference({"title": None})


class TestFilterImportCandidates:
    """Tests for excluding already-linked events."""

    def test_linked_events_excluded(self):
        events = [
            {"id": "e1", "title": "AWS Summit"},
            {"id": "e2", "title": "DefenseTech Expo"},
            {"id": "e3", "title": "Dentist"},
        ]
        assert filter_import_candidates(events, {"e1"}) == [{"id": "e2", "title": "DefenseTech Expo"}]


class TestFetchImportCandidates:
    """Tests for the database-backed candidate list."""

    def test_recent_unlinked_conference_events(self, db, session):
        db.seed(
            "calendar_events",
            {"id": "too-old", "title": "Old Summit", "start_date": "2025-05-01", "user_id": "user-1"},
            {"id": "linked", "title": "Linked Expo", "start_date": "2025-06-05", "user_id": "user-1"},
            {"id": "later", "title": "Cyber Symposium", "start_date": "2025-07-20", "user_id": "user-1"},
            {"id": "meeting", "title": "1:1", "start_date": "2025-06-10", "user_id": "user-1"},
            {"id": "earlier", "title": "Analytics Conference", "start_date": "2025-06-15", "user_id": "user-1"},
        )
        db.seed("conferences", {"id": "conf-1", "name": "Linked Expo", "calendar_event_id": "linked", "created_by": "user-1"})
        db.seed("conferences", {"id": "conf-2", "name": "Unlinked", "calendar_event_id": None, "created_by": "user-1"})

        candidates = fetch_import_candidates(session, today=date(2025, 6, 30))

        assert [c["id"] for c in candidates] == ["earlier", "later"]

    def test_other_users_events_excluded(self, db, session):
        db.seed(
            "calendar_events",
            {"id": "mine", "title": "AWS Summit", "start_date": "2025-06-10", "user_id": "user-1"},
            {"id": "theirs", "title": "Space Symposium", "start_date": "2025-06-12", "user_id": "user-2"},
        )

        candidates = fetch_import_candidates(session, today=date(2025, 6, 30))

        assert [c["id"] for c in candidates] == ["mine"]

    def test_links_made_by_other_users_do_not_hide_events(self, db, session):
        db.seed("calendar_events", {"id": "mine", "title": "AWS Summit", "start_date": "2025-06-10", "user_id": "user-1"})
        db.seed("conferences", {"id": "conf-9", "name": "AWS Summit", "calendar_event_id": "mine", "created_by": "user-2"})

        candidates = fetch_import_candidates(session, today=date(2025, 6, 30))

        assert [c["id"] for c in candidates] == ["mine"]


class TestImportCalendarEvents:
    """Tests for the bulk insert."""

    CANDIDATES = [
        {"id": "e1", "title": "AWS Summit", "start_date": "2025-06-10", "end_date": "2025-06-11",
         "location": "Washington, DC", "description": "Public sector day"},
        {"id": "e2", "title": "Space Symposium", "start_date": "2025-04-07", "end_date": None,
         "location": None, "description": None},
    ]

    def test_empty_selection_rejected(self, db, session):
        with pytest.raises(ValidationError, match="Please select at least one event"):
            import_calendar_events(session, self.CANDIDATES, [])
        assert db.calls == []

    def test_one_conference_per_selected_event(self, db, session):
        created = import_calendar_events(session, self.CANDIDATES, ["e1", "e2"])

        assert len(created) == 2
        assert db.calls.count(("conferences", "insert")) == 1
        first, second = db.tables["conferences"]
        assert first["name"] == "AWS Summit"
        assert first["calendar_event_id"] == "e1"
        assert first["calendar_source"] == "internal"
        assert first["created_by"] == "user-1"
        assert second["location"] == "TBD"
        assert second["end_date"] == "2025-04-07"
        assert View.CONFERENCES in session.stale_views

    def test_only_selected_events_imported(self, db, session):
        import_calendar_events(session, self.CANDIDATES, ["e2"])
        assert [c["calendar_event_id"] for c in db.tables["conferences"]] == ["e2"]

    def test_batch_failure_propagates(self, db, session):
        db.fail("conferences", "insert")
        with pytest.raises(FakeAPIError):
            import_calendar_events(session, self.CANDIDATES, ["e1"])
        assert not session.stale_views

    def test_conference_row_copies_description(self):
        row = conference_from_calendar_event(self.CANDIDATES[0], "user-1")
        assert row["description"] == "Public sector day"
        assert row["location"] == "Washington, DC"
