"""Display defaults for calendar event types.

Explicit per-event fields (type_custom, color_hex, icon_name) always win over
the defaults derived from event_type.
"""

from src.config import (
    EVENT_TYPE_MAP,
    DEFAULT_EVENT_TYPE,
    FALLBACK_ICON_NAME,
    ICON_MAP,
)


def get_event_type_label(event_type: str | None, type_custom: str | None) -> str:
    """Label shown for an event's type."""
    if type_custom:
        return type_custom
    if not event_type:
        return EVENT_TYPE_MAP[DEFAULT_EVENT_TYPE]["label"]
    config = EVENT_TYPE_MAP.get(event_type)
    if config:
        return config["label"]
    return event_type[:1].upper() + event_type[1:]


def get_event_color(color_hex: str | None, event_type: str | None) -> str:
    """Hex color for an event."""
    if color_hex:
        return color_hex
    config = EVENT_TYPE_MAP.get(event_type or DEFAULT_EVENT_TYPE) or EVENT_TYPE_MAP[DEFAULT_EVENT_TYPE]
    return config["default_color"]


def get_event_icon_name(icon_name: str | None, event_type: str | None) -> str:
    """Icon name for an event."""
    if icon_name:
        return icon_name
    if not event_type:
        return EVENT_TYPE_MAP[DEFAULT_EVENT_TYPE]["default_icon"]
    config = EVENT_TYPE_MAP.get(event_type)
    return config["default_icon"] if config else FALLBACK_ICON_NAME


def get_event_icon(icon_name: str | None, event_type: str | None) -> str:
    """Streamlit material icon for an event; unknown names fall back to the type default."""
    if icon_name and icon_name in ICON_MAP:
        return ICON_MAP[icon_name]
    return ICON_MAP.get(get_event_icon_name(None, event_type), ICON_MAP[FALLBACK_ICON_NAME])


def event_display(event: dict) -> dict:
    """Resolved label/color/icon for a calendar event row."""
    event_type = event.get("event_type")
    return {
        "label": get_event_type_label(event_type, event.get("type_custom")),
        "color": get_event_color(event.get("color_hex"), event_type),
        "icon": get_event_icon(event.get("icon_name"), event_type),
    }
