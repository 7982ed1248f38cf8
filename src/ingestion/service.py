"""Conference-from-URL ingestion and the confirm/save step that follows it."""

import logging
from datetime import date, datetime, timezone

import requests

from src.config import FALLBACK_DESCRIPTION, FETCH_FAILED, View
from src.calendar_sync.linker import (
    create_calendar_event_for_conference,
    update_calendar_event_with_travel_days,
)
from src.calendar_sync.travel import TravelDays
from src.database import (
    create_conference,
    find_conference_by_source_url,
    update_conference,
    update_conference_by_source_url,
)
from src.ingestion.parser import parse_conference_page
from src.ingestion.results import ParsedConference, FallbackStub, IngestionFailed
from src.session import SessionContext
from src.validation import ValidationError, validate_conference_form, validate_url

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _upsert_conference(session: SessionContext, url: str, data: dict) -> tuple:
    """Insert or update the user's conference for `url`; returns (id, existing row)."""
    existing = find_conference_by_source_url(url, session.user_id)
    if existing:
        update_conference(existing["id"], data)
        return existing["id"], existing
    created = create_conference(data)
    return created["id"], None


def _conference_row(session: SessionContext, url: str, result) -> dict:
    fields = result.fields
    if isinstance(result, FallbackStub):
        return {
            "name": fields.name,
            "start_date": None,
            "end_date": None,
            "location": None,
            "description": FALLBACK_DESCRIPTION,
            "tags": ["conference"],
            "source_url": url,
            "website_data": {"error": FETCH_FAILED, "details": result.details, "ingested_at": _now_iso()},
            "created_by": session.user_id,
        }
    return {
        "name": fields.name,
        "start_date": fields.start_date,
        "end_date": fields.end_date,
        "location": fields.location,
        "description": fields.short_description,
        "tags": fields.tags,
        "source_url": url,
        "website_data": {**fields.to_dict(), "ingested_at": _now_iso()},
        "created_by": session.user_id,
    }


def _sync_calendar_for_ingested(session: SessionContext, conference_id: str, existing: dict | None, row: dict):
    """Create or refresh the calendar event for a freshly parsed conference."""
    conference = {**row, "id": conference_id}
    try:
        if existing and existing.get("calendar_event_id"):
            update_calendar_event_with_travel_days(session, existing["calendar_event_id"], conference)
        else:
            create_calendar_event_for_conference(session, conference)
    except Exception as e:
        # The conference is stored; the confirm step retries the calendar sync
        logger.error("Calendar sync after ingestion failed for %s: %s", conference_id, e)


def ingest_conference_from_url(
    session: SessionContext,
    url: str,
    model: str = None,
    http=requests,
    today: date = None,
) -> dict:
    """Parse a conference page and store the result for the user to confirm.

    Returns the wire response:
        - success: bool
        - conference: {id, name, start_date, end_date, location,
          short_description, tags, venue, registration_url}
        - raw: parsed data, or {error: 'fetch_failed', details} for stubs
        - error: message when success is False
        - result: the tagged ParsedConference / FallbackStub / IngestionFailed
    """
    url = validate_url(url)
    logger.info("Starting conference ingestion for %s", url)

    result = parse_conference_page(url, model=model, http=http, today=today)
    if isinstance(result, IngestionFailed):
        return {"success": False, "error": result.reason, "result": result}

    row = _conference_row(session, url, result)
    try:
        conference_id, existing = _upsert_conference(session, url, row)
    except Exception as e:
        logger.error("Failed to store ingested conference for %s: %s", url, e)
        failed = IngestionFailed(reason=f"Failed to save conference: {e}")
        return {"success": False, "error": failed.reason, "result": failed}
    session.invalidate(View.CONFERENCES)

    if isinstance(result, ParsedConference):
        _sync_calendar_for_ingested(session, conference_id, existing, row)

    logger.info("Conference ingestion completed: %s", conference_id)
    return {
        "success": True,
        "conference": {"id": conference_id, **result.fields.to_dict()},
        "raw": result.raw,
        "result": result,
    }


def save_ingested_conference(
    session: SessionContext,
    url: str,
    edited: dict,
    travel_days: TravelDays = None,
) -> dict:
    """Apply the user's edits to an ingested conference and sync its calendar event.

    Returns dict with:
        - conference: the stored row
        - calendar_event_id: str or None
        - warning: str or None
    """
    url = validate_url(url)
    validate_conference_form(
        edited.get("name"), edited.get("start_date"), edited.get("end_date"), edited.get("location")
    )

    updated = update_conference_by_source_url(url, session.user_id, {
        "name": edited["name"],
        "start_date": edited["start_date"],
        "end_date": edited["end_date"],
        "location": edited["location"],
        "description": edited.get("short_description"),
        "tags": edited.get("tags") or [],
    })
    if not updated:
        raise ValidationError("Conference not found for this URL; ingest it again")
    session.invalidate(View.CONFERENCES)

    result = {"conference": updated, "calendar_event_id": updated.get("calendar_event_id"), "warning": None}
    try:
        if updated.get("calendar_event_id"):
            update_calendar_event_with_travel_days(session, updated["calendar_event_id"], updated, travel_days)
        else:
            result["calendar_event_id"] = create_calendar_event_for_conference(session, updated, travel_days)
    except Exception as e:
        logger.error("Failed to update calendar event for %s: %s", updated.get("id"), e)
        result["warning"] = "Conference saved but calendar sync failed"
    return result
