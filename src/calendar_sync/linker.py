"""Conference <-> calendar event linking.

A conference points at (at most) one calendar event through
conferences.calendar_event_id. The functions here create that event, keep
its title/dates/location/description mirrored from the conference, and
write the link. Each is a plain sequence of remote calls; a failure aborts
the sequence and propagates without undoing earlier steps.
"""

import logging

from src.config import (
    CONFERENCE_EVENT_TYPE,
    CONFERENCE_COLOR_HEX,
    CONFERENCE_ICON_NAME,
    LINK_LOOKBACK_DAYS,
    View,
)
from src.database import (
    create_calendar_event,
    find_conference_event,
    get_calendar_event_id,
    get_calendar_events_since,
    set_conference_calendar_link,
    update_calendar_event,
    update_conference,
)
from src.calendar_sync.travel import TravelDays, travel_date_range, compose_description
from src.session import SessionContext
from src.utils import days_ago

logger = logging.getLogger(__name__)

# conference field -> calendar event field
CONFERENCE_TO_EVENT_FIELDS = {
    "name": "title",
    "start_date": "start_date",
    "end_date": "end_date",
    "location": "location",
    "description": "description",
}

# calendar event field -> conference field
EVENT_TO_CONFERENCE_FIELDS = {
    "title": "name",
    "start_date": "start_date",
    "end_date": "end_date",
    "location": "location",
}


def _map_fields(updates: dict, mapping: dict) -> dict:
    """Rename the keys present in `updates`; absent keys are not written."""
    return {target: updates[source] for source, target in mapping.items() if source in updates}


def create_calendar_event_for_conference(
    session: SessionContext,
    conference: dict,
    travel_days: TravelDays = None,
) -> str:
    """Ensure a calendar event represents `conference` and return its id.

    Order of checks:
        1. the conference is already linked -> return that id unchanged
        2. an identical conference event (same owner, title, computed
           start/end) exists -> link it
        3. otherwise create one and link it
    """
    try:
        existing_id = get_calendar_event_id(conference["id"])
        if existing_id:
            return existing_id

        start_date, end_date = travel_date_range(
            conference["start_date"], conference["end_date"], travel_days
        )
        title = conference["name"]

        existing_event = find_conference_event(session.user_id, title, start_date, end_date)
        if existing_event:
            set_conference_calendar_link(conference["id"], existing_event["id"])
            session.invalidate(View.CONFERENCES, View.CALENDAR_EVENTS)
            logger.info("Linked conference %s to existing event %s", conference["id"], existing_event["id"])
            return existing_event["id"]

        event = create_calendar_event({
            "title": title,
            "start_date": start_date,
            "end_date": end_date,
            "location": conference.get("location") or "",
            "description": compose_description(conference, travel_days),
            "event_type": CONFERENCE_EVENT_TYPE,
            "all_day": True,
            "user_id": session.user_id,
            "type_custom": None,
            "color_hex": CONFERENCE_COLOR_HEX,
            "icon_name": CONFERENCE_ICON_NAME,
        })
        set_conference_calendar_link(conference["id"], event["id"])
        session.invalidate(View.CONFERENCES, View.CALENDAR_EVENTS)
        logger.info("Created calendar event %s for conference %s", event["id"], conference["id"])
        return event["id"]
    except Exception:
        logger.exception("Error creating calendar event for conference %s", conference.get("id"))
        raise


def update_calendar_event_with_travel_days(
    session: SessionContext,
    calendar_event_id: str,
    conference: dict,
    travel_days: TravelDays = None,
):
    """Overwrite a linked event with the conference's (travel-padded) range.

    Any travel summary already in the description is replaced, so running
    this with zero travel days collapses the event back to the conference
    dates with a clean description.
    """
    start_date, end_date = travel_date_range(
        conference["start_date"], conference["end_date"], travel_days
    )
    try:
        update_calendar_event(calendar_event_id, {
            "title": conference["name"],
            "start_date": start_date,
            "end_date": end_date,
            "location": conference.get("location"),
            "description": compose_description(conference, travel_days),
        })
    except Exception:
        logger.exception("Error updating calendar event %s with travel days", calendar_event_id)
        raise
    session.invalidate(View.CALENDAR_EVENTS, View.CONFERENCES)


def update_calendar_event_from_conference(session: SessionContext, calendar_event_id: str, updates: dict):
    """Mirror edited conference fields onto its calendar event."""
    fields = _map_fields(updates, CONFERENCE_TO_EVENT_FIELDS)
    if not fields:
        return
    try:
        update_calendar_event(calendar_event_id, fields)
    except Exception:
        logger.exception("Error updating calendar event %s", calendar_event_id)
        raise
    session.invalidate(View.CALENDAR_EVENTS)


def update_conference_from_calendar_event(session: SessionContext, conference_id: str, updates: dict):
    """Mirror edited calendar event fields back onto its conference."""
    fields = _map_fields(updates, EVENT_TO_CONFERENCE_FIELDS)
    if not fields:
        return
    try:
        update_conference(conference_id, fields)
    except Exception:
        logger.exception("Error updating conference %s", conference_id)
        raise
    session.invalidate(View.CONFERENCES)


def link_existing_calendar_event(session: SessionContext, conference_id: str, calendar_event_id: str):
    """Link-only write, for events that already exist."""
    try:
        set_conference_calendar_link(conference_id, calendar_event_id)
    except Exception:
        logger.exception("Error linking calendar event %s to conference %s", calendar_event_id, conference_id)
        raise
    session.invalidate(View.CONFERENCES)


def list_linkable_calendar_events(session: SessionContext, today=None) -> list:
    """Recent calendar events (newest first) a conference can be linked to."""
    return get_calendar_events_since(session.user_id, days_ago(LINK_LOOKBACK_DAYS, today), descending=True)


def link_calendar_event_with_dates(session: SessionContext, conference_id: str, event: dict):
    """Link a chosen event and adopt its dates on the conference."""
    try:
        set_conference_calendar_link(conference_id, event["id"], extra={
            "start_date": event["start_date"],
            "end_date": event.get("end_date") or event["start_date"],
        })
    except Exception:
        logger.exception("Error linking calendar event %s to conference %s", event.get("id"), conference_id)
        raise
    session.invalidate(View.CONFERENCES)
