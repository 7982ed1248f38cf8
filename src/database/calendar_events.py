"""Calendar event CRUD operations."""

from src.config import CONFERENCE_EVENT_TYPE
from src.database.client import get_supabase_client, with_retry, first_row


def create_calendar_event(data: dict) -> dict:
    """Insert a calendar event and return the stored row."""
    result = get_supabase_client().from_("calendar_events").insert(data).execute()
    return first_row(result)


@with_retry()
def get_calendar_event(event_id: str) -> dict | None:
    """Get a single calendar event by ID."""
    result = get_supabase_client().from_("calendar_events").select("*").eq(
        "id", event_id
    ).limit(1).execute()
    return first_row(result)


@with_retry()
def get_calendar_events(user_id: str) -> list:
    """All of a user's calendar events, by start date."""
    result = get_supabase_client().from_("calendar_events").select("*").eq(
        "user_id", user_id
    ).order("start_date").execute()
    return result.data or []


@with_retry()
def get_calendar_events_since(user_id: str, start_date: str, descending: bool = False) -> list:
    """A user's calendar events starting on or after `start_date`."""
    result = get_supabase_client().from_("calendar_events").select("*").eq(
        "user_id", user_id
    ).gte("start_date", start_date).order("start_date", desc=descending).execute()
    return result.data or []


@with_retry()
def find_conference_event(user_id: str, title: str, start_date: str, end_date: str) -> dict | None:
    """Existing conference-type event with the same title and date range."""
    result = get_supabase_client().from_("calendar_events").select("id").eq(
        "user_id", user_id
    ).eq("event_type", CONFERENCE_EVENT_TYPE).eq("title", title).eq(
        "start_date", start_date
    ).eq("end_date", end_date).limit(1).execute()
    return first_row(result)


def update_calendar_event(event_id: str, updates: dict):
    """Update calendar event fields."""
    get_supabase_client().from_("calendar_events").update(updates).eq("id", event_id).execute()


def delete_calendar_event(event_id: str):
    """Delete a calendar event."""
    get_supabase_client().from_("calendar_events").delete().eq("id", event_id).execute()
