"""Form workflows: conferences (add and edit, each followed by calendar sync)
and manually managed calendar events.

A calendar failure after the conference write succeeded does not undo the
write; it is returned as a warning for the UI to show.
"""

import logging

from src.config import DEFAULT_EVENT_TYPE, View
from src.database import (
    create_calendar_event,
    create_conference,
    update_calendar_event,
    update_conference,
)
from src.calendar_sync.linker import (
    create_calendar_event_for_conference,
    update_calendar_event_from_conference,
    update_conference_from_calendar_event,
)
from src.session import SessionContext
from src.utils import parse_tags
from src.validation import validate_calendar_event_form, validate_conference_form

logger = logging.getLogger(__name__)


def add_conference(
    session: SessionContext,
    name: str,
    start_date: str,
    end_date: str,
    location: str,
    description: str = "",
    tags: str = "",
) -> dict:
    """Create a conference and its calendar event.

    Returns dict with:
        - conference: the stored row
        - calendar_event_id: str or None
        - warning: str or None
    """
    validate_conference_form(name, start_date, end_date, location)

    conference = create_conference({
        "name": name,
        "start_date": start_date,
        "end_date": end_date,
        "location": location,
        "description": description or None,
        "tags": parse_tags(tags),
        "created_by": session.user_id,
    })
    session.invalidate(View.CONFERENCES)

    result = {"conference": conference, "calendar_event_id": None, "warning": None}
    try:
        result["calendar_event_id"] = create_calendar_event_for_conference(session, conference)
    except Exception as e:
        logger.error("Failed to create calendar event for conference %s: %s", conference["id"], e)
        result["warning"] = "Conference created but calendar event failed"
    return result


def edit_conference(session: SessionContext, conference: dict, updates: dict) -> dict:
    """Update a conference and mirror the change onto its linked event.

    Returns dict with:
        - conference: the stored row
        - warning: str or None
    """
    merged = {**conference, **updates}
    validate_conference_form(merged.get("name"), merged.get("start_date"), merged.get("end_date"), merged.get("location"))

    if "tags" in updates and isinstance(updates["tags"], str):
        updates = {**updates, "tags": parse_tags(updates["tags"])}

    stored = update_conference(conference["id"], updates) or merged
    session.invalidate(View.CONFERENCES)

    result = {"conference": stored, "warning": None}
    if conference.get("calendar_event_id"):
        try:
            update_calendar_event_from_conference(session, conference["calendar_event_id"], updates)
        except Exception as e:
            logger.error("Failed to sync calendar event for conference %s: %s", conference["id"], e)
            result["warning"] = "Conference updated but calendar sync failed"
    return result


CALENDAR_EVENT_FIELDS = (
    "title", "description", "start_date", "end_date", "all_day", "start_time", "end_time",
    "location", "event_type", "type_custom", "color_hex", "icon_name", "invite_email",
)


def _calendar_event_row(form: dict) -> dict:
    """Known calendar event fields from a form; blank strings become None."""
    row = {}
    for key in CALENDAR_EVENT_FIELDS:
        if key not in form:
            continue
        value = form[key]
        if isinstance(value, str):
            value = value.strip() or None
        row[key] = value
    if row.get("all_day"):
        row["start_time"] = None
        row["end_time"] = None
    if "event_type" in row and row["event_type"] != "custom":
        row["type_custom"] = None
    return row


def _validate_calendar_event(event: dict):
    # A missing all_day flag means all-day
    all_day = event.get("all_day")
    validate_calendar_event_form(
        event.get("title"),
        event.get("start_date"),
        event.get("end_date"),
        event.get("start_time"),
        event.get("end_time"),
        all_day=True if all_day is None else all_day,
    )


def add_calendar_event(session: SessionContext, form: dict) -> dict:
    """Create a calendar event owned by the session user; returns the stored row."""
    row = _calendar_event_row(form)
    row["event_type"] = row.get("event_type") or DEFAULT_EVENT_TYPE
    row["all_day"] = bool(row.get("all_day", True))
    _validate_calendar_event(row)

    event = create_calendar_event({**row, "user_id": session.user_id})
    session.invalidate(View.CALENDAR_EVENTS)
    logger.info("Created %s event %s", row["event_type"], event["id"])
    return event


def edit_calendar_event(session: SessionContext, event: dict, updates: dict, linked_conference: dict = None) -> dict:
    """Update a calendar event; a linked conference follows title, dates and location.

    Returns dict with:
        - event: the event with updates applied
        - warning: str or None
    """
    row = _calendar_event_row(updates)
    merged = {**event, **row}
    _validate_calendar_event(merged)

    update_calendar_event(event["id"], row)
    session.invalidate(View.CALENDAR_EVENTS)

    result = {"event": merged, "warning": None}
    if linked_conference:
        try:
            update_conference_from_calendar_event(session, linked_conference["id"], row)
        except Exception as e:
            logger.error("Failed to sync conference %s from event %s: %s", linked_conference["id"], event["id"], e)
            result["warning"] = "Event updated but conference sync failed"
    return result
