# Database layer - Supabase operations

from src.database.client import (
    get_supabase_client,
    get_service_client,
    create_user_client,
    set_supabase_client,
    with_retry,
    first_row,
)

from src.database.conferences import (
    create_conference,
    create_conferences,
    get_calendar_event_id,
    get_all_conferences,
    get_linked_calendar_event_ids,
    find_conference_by_source_url,
    update_conference,
    update_conference_by_source_url,
    set_conference_calendar_link,
)

from src.database.calendar_events import (
    create_calendar_event,
    get_calendar_event,
    get_calendar_events,
    get_calendar_events_since,
    find_conference_event,
    update_calendar_event,
    delete_calendar_event,
)

from src.database.profiles import (
    get_profile,
    get_all_profiles,
    update_profile_flags,
)

__all__ = [
    # Client
    "get_supabase_client",
    "get_service_client",
    "create_user_client",
    "set_supabase_client",
    "with_retry",
    "first_row",
    # Conferences
    "create_conference",
    "create_conferences",
    "get_calendar_event_id",
    "get_all_conferences",
    "get_linked_calendar_event_ids",
    "find_conference_by_source_url",
    "update_conference",
    "update_conference_by_source_url",
    "set_conference_calendar_link",
    # Calendar events
    "create_calendar_event",
    "get_calendar_event",
    "get_calendar_events",
    "get_calendar_events_since",
    "find_conference_event",
    "update_calendar_event",
    "delete_calendar_event",
    # Profiles
    "get_profile",
    "get_all_profiles",
    "update_profile_flags",
]
