"""Bulk import of conference-like calendar events as conferences."""

import logging

from src.config import (
    CALENDAR_SOURCE_INTERNAL,
    CONFERENCE_EVENT_TYPE,
    CONFERENCE_KEYWORDS,
    DEFAULT_IMPORT_LOCATION,
    IMPORT_LOOKBACK_DAYS,
    View,
)
from src.database import (
    create_conferences,
    get_calendar_events_since,
    get_linked_calendar_event_ids,
)
from src.session import SessionContext
from src.utils import days_ago
from src.validation import ValidationError

logger = logging.getLogger(__name__)


def looks_like_conference(event: dict) -> bool:
    """Conference-typed, or titled like one (keyword match, case-insensitive)."""
    if event.get("event_type") == CONFERENCE_EVENT_TYPE or event.get("type") == CONFERENCE_EVENT_TYPE:
        return True
    title = (event.get("title") or "").lower()
    return any(keyword in title for keyword in CONFERENCE_KEYWORDS)


def filter_import_candidates(events: list, linked_ids: set) -> list:
    """Conference-like events not yet linked to any conference, order kept."""
    return [
        event for event in events
        if looks_like_conference(event) and event["id"] not in linked_ids
    ]


def fetch_import_candidates(session: SessionContext, today=None) -> list:
    """Recent unlinked calendar events that look like conferences."""
    events = get_calendar_events_since(session.user_id, days_ago(IMPORT_LOOKBACK_DAYS, today))
    linked_ids = get_linked_calendar_event_ids(session.user_id)
    candidates = filter_import_candidates(events, linked_ids)
    logger.info("Import candidates: %d of %d recent events", len(candidates), len(events))
    return candidates


def conference_from_calendar_event(event: dict, user_id: str) -> dict:
    """Conference row for an imported calendar event, already linked."""
    return {
        "name": event["title"],
        "start_date": event["start_date"],
        "end_date": event.get("end_date") or event["start_date"],
        "location": event.get("location") or DEFAULT_IMPORT_LOCATION,
        "description": event.get("description"),
        "calendar_event_id": event["id"],
        "calendar_source": CALENDAR_SOURCE_INTERNAL,
        "created_by": user_id,
    }


def import_calendar_events(session: SessionContext, candidates: list, selected_ids: list) -> list:
    """Create one conference per selected candidate in a single insert."""
    if not selected_ids:
        raise ValidationError("Please select at least one event")

    selected = set(selected_ids)
    rows = [
        conference_from_calendar_event(event, session.user_id)
        for event in candidates
        if event["id"] in selected
    ]
    if not rows:
        raise ValidationError("Selected events are no longer available to import")

    try:
        created = create_conferences(rows)
    except Exception:
        logger.exception("Failed to import %d calendar events", len(rows))
        raise
    session.invalidate(View.CONFERENCES)
    logger.info("Imported %d conferences from calendar", len(rows))
    return created
