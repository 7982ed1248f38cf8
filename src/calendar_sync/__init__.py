# Calendar sync layer - conference linking, import, invites, display defaults

from src.calendar_sync.event_types import (
    get_event_type_label,
    get_event_color,
    get_event_icon_name,
    get_event_icon,
    event_display,
)

from src.calendar_sync.travel import (
    TravelDays,
    travel_date_range,
    build_travel_summary,
    strip_travel_summary,
    compose_description,
)

from src.calendar_sync.linker import (
    create_calendar_event_for_conference,
    update_calendar_event_with_travel_days,
    update_calendar_event_from_conference,
    update_conference_from_calendar_event,
    link_existing_calendar_event,
    list_linkable_calendar_events,
    link_calendar_event_with_dates,
)

from src.calendar_sync.importer import (
    looks_like_conference,
    filter_import_candidates,
    fetch_import_candidates,
    import_calendar_events,
)

from src.calendar_sync.invites import (
    InviteError,
    generate_ics,
    format_date_for_email,
    send_calendar_invite,
)

from src.calendar_sync.workflows import (
    add_conference,
    edit_conference,
    add_calendar_event,
    edit_calendar_event,
)

__all__ = [
    # Display
    "get_event_type_label",
    "get_event_color",
    "get_event_icon_name",
    "get_event_icon",
    "event_display",
    # Travel
    "TravelDays",
    "travel_date_range",
    "build_travel_summary",
    "strip_travel_summary",
    "compose_description",
    # Linker
    "create_calendar_event_for_conference",
    "update_calendar_event_with_travel_days",
    "update_calendar_event_from_conference",
    "update_conference_from_calendar_event",
    "link_existing_calendar_event",
    "list_linkable_calendar_events",
    "link_calendar_event_with_dates",
    # Import
    "looks_like_conference",
    "filter_import_candidates",
    "fetch_import_candidates",
    "import_calendar_events",
    # Invites
    "InviteError",
    "generate_ics",
    "format_date_for_email",
    "send_calendar_invite",
    # Workflows
    "add_conference",
    "edit_conference",
    "add_calendar_event",
    "edit_calendar_event",
]
