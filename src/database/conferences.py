"""Conference CRUD operations."""

from src.config import CALENDAR_SOURCE_INTERNAL
from src.database.client import get_supabase_client, with_retry, first_row


def create_conference(data: dict) -> dict:
    """Insert a conference and return the stored row."""
    result = get_supabase_client().from_("conferences").insert(data).execute()
    return first_row(result)


def create_conferences(rows: list) -> list:
    """Bulk insert conferences in a single request (all-or-nothing)."""
    result = get_supabase_client().from_("conferences").insert(rows).execute()
    return result.data or []


@with_retry()
def get_calendar_event_id(conference_id: str) -> str | None:
    """Current calendar_event_id link for a conference, if any."""
    result = get_supabase_client().from_("conferences").select(
        "calendar_event_id"
    ).eq("id", conference_id).limit(1).execute()
    row = first_row(result)
    return row.get("calendar_event_id") if row else None


@with_retry()
def get_all_conferences(user_id: str) -> list:
    """Get a user's conferences, soonest first."""
    result = get_supabase_client().from_("conferences").select("*").eq(
        "created_by", user_id
    ).order("start_date").execute()
    return result.data or []


@with_retry()
def get_linked_calendar_event_ids(user_id: str) -> set:
    """Calendar event ids already linked to one of the user's conferences."""
    result = get_supabase_client().from_("conferences").select(
        "calendar_event_id"
    ).eq("created_by", user_id).not_.is_("calendar_event_id", "null").execute()
    return {row["calendar_event_id"] for row in (result.data or []) if row.get("calendar_event_id")}


@with_retry()
def find_conference_by_source_url(source_url: str, user_id: str) -> dict | None:
    """Conference previously ingested from this URL by this user."""
    result = get_supabase_client().from_("conferences").select(
        "id, calendar_event_id"
    ).eq("source_url", source_url).eq("created_by", user_id).limit(1).execute()
    return first_row(result)


def update_conference(conference_id: str, updates: dict) -> dict | None:
    """Update conference fields and return the stored row."""
    result = get_supabase_client().from_("conferences").update(updates).eq(
        "id", conference_id
    ).execute()
    return first_row(result)


def update_conference_by_source_url(source_url: str, user_id: str, updates: dict) -> dict | None:
    """Update the conference ingested from `source_url` by `user_id`."""
    result = get_supabase_client().from_("conferences").update(updates).eq(
        "source_url", source_url
    ).eq("created_by", user_id).execute()
    return first_row(result)


def set_conference_calendar_link(conference_id: str, calendar_event_id: str, extra: dict = None):
    """Point a conference at a calendar event."""
    updates = {
        "calendar_event_id": calendar_event_id,
        "calendar_source": CALENDAR_SOURCE_INTERNAL,
    }
    if extra:
        updates.update(extra)
    get_supabase_client().from_("conferences").update(updates).eq("id", conference_id).execute()
