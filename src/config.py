"""Configuration constants and environment settings."""

import os

import streamlit as st

APP_NAME = "Wolf Street"
APP_DOMAIN = "wolfstreet.app"


def get_secret(key: str, default: str = "") -> str:
    """Read a setting from the environment, falling back to Streamlit secrets."""
    value = os.environ.get(key)
    if value:
        return value
    # st.secrets raises when no secrets.toml exists (local dev, tests)
    try:
        return st.secrets.get(key, default)
    except Exception:
        return default


# Conference defaults for linked calendar events
CONFERENCE_EVENT_TYPE = "conference"
CONFERENCE_COLOR_HEX = "#8B5CF6"
CONFERENCE_ICON_NAME = "presentation"
CALENDAR_SOURCE_INTERNAL = "internal"

# Event type display defaults: label, default color, default icon
EVENT_TYPE_MAP = {
    "conference": {"label": "Conference", "default_color": "#8B5CF6", "default_icon": "presentation"},
    "meeting": {"label": "Meeting", "default_color": "#3B82F6", "default_icon": "users"},
    "deadline": {"label": "Deadline", "default_color": "#EF4444", "default_icon": "alert"},
    "travel": {"label": "Travel", "default_color": "#14B8A6", "default_icon": "plane"},
    "webinar": {"label": "Webinar", "default_color": "#6366F1", "default_icon": "video"},
    "reminder": {"label": "Reminder", "default_color": "#F59E0B", "default_icon": "clock"},
}
EVENT_TYPES = ["meeting", "deadline", "conference", "travel", "reminder", "webinar", "custom"]
DEFAULT_EVENT_TYPE = "meeting"
FALLBACK_ICON_NAME = "calendar"

# Material icons used by the Streamlit UI for each icon name
ICON_MAP = {
    "calendar": ":material/calendar_month:",
    "flag": ":material/flag:",
    "briefcase": ":material/work:",
    "star": ":material/star:",
    "map-pin": ":material/location_on:",
    "users": ":material/group:",
    "plane": ":material/flight:",
    "alert": ":material/error:",
    "video": ":material/videocam:",
    "clock": ":material/schedule:",
    "target": ":material/target:",
    "presentation": ":material/co_present:",
}

# Calendar import heuristics
IMPORT_LOOKBACK_DAYS = 30
LINK_LOOKBACK_DAYS = 60
CONFERENCE_KEYWORDS = [
    "conference", "summit", "expo", "symposium", "convention",
    "i/itsec", "itsec", "workshop", "forum", "seminar",
]
DEFAULT_IMPORT_LOCATION = "TBD"

# Travel summary glyphs prepended to calendar descriptions
TRAVEL_GLYPH = "\u2708\ufe0f"
CONFERENCE_GLYPH = "\U0001F4CD"

# Microsoft Outlook / Graph
OUTLOOK_TOKEN_KEY = "outlook_tokens"
OUTLOOK_PENDING_KEY = "outlook_auth_pending"
OUTLOOK_SCOPES = "Calendars.ReadWrite offline_access"
MICROSOFT_AUTHORIZE_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/authorize"
MICROSOFT_TOKEN_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/token"
MICROSOFT_GRAPH_URL = "https://graph.microsoft.com/v1.0"
OUTLOOK_CALLBACK_PAGE = "calendar"
HTTP_TIMEOUT_SECONDS = 30

# Calendar invites
ICS_PRODID = "-//Wolf Street BD Intelligence//EN"
ICS_FILENAME = "event.ics"
DEFAULT_EVENT_DURATION_MINUTES = 60
DEFAULT_FROM_EMAIL = "Wolf Street <calendar@wolfstreet.app>"

# URL ingestion
INGEST_HTML_LIMIT = 80000
INGEST_PLACEHOLDER_DAYS = 30
INGEST_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FALLBACK_DESCRIPTION = "Conference imported from website; details not parsed automatically."
FETCH_FAILED = "fetch_failed"
DEFAULT_TRAVEL_DAYS = 1

# LLM Models by provider
LLM_MODELS = {
    "Gemini": ["gemini-2.5-flash", "gemini-2.5-pro", "gemini-2.0-flash"],
    "OpenAI": ["gpt-4o", "gpt-4o-mini"],
    "Anthropic": ["claude-sonnet-4-20250514"],
}

# Default model for conference extraction
DEFAULT_MODEL = "gemini-2.5-flash"
LLM_MAX_TOKENS = 4096


class View:
    """Cached view names refreshed after mutations."""
    CONFERENCES = "conferences"
    CALENDAR_EVENTS = "calendar-events"


class SessionKey:
    """Session state key names to avoid typos."""
    SESSION = "wolf_session"
    SUPABASE_CLIENT = "supabase_client"
    ACTIVE_VIEW = "active_view"
    SELECTED_MODEL = "selected_model"
    CONFERENCES = "conferences_cache"
    CALENDAR_EVENTS = "calendar_events_cache"
    INGEST_URL = "ingest_url"
    INGEST_RESULT = "ingest_result"
    IMPORT_SELECTION = "import_selection"


# AI extraction prompt - used to pull conference details out of a web page
CONFERENCE_EXTRACTION_PROMPT = """You are an expert at extracting conference and event information from websites.

CURRENT DATE CONTEXT: Today is {current_month} {current_day}, {current_year}.
When you see dates like "January 14-15" without a year, assume the NEXT occurrence of that date.
- If the month has already passed this year, the event is in {next_year}
- If the month is still coming this year, the event is in {current_year}

Analyze this HTML and extract COMPLETE conference details:

{html}

## EXTRACTION REQUIREMENTS
1. name: full official name including the year if shown (e.g. "I/ITSEC 2025")
2. start_date / end_date: YYYY-MM-DD. "14-15 Jan" means Jan 14 to Jan 15; handle ranges spanning months
3. location: "City, State" or "City, Country"
4. venue: venue name if mentioned
5. short_description: 3-5 sentences covering audience, themes, industry focus and notable features
6. tags: 5-10 relevant keywords
7. registration_url: separate registration link if visible

## OUTPUT FORMAT (JSON object only, no markdown)
{{"name": "...", "start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD", "location": "...", "venue": "...", "short_description": "...", "tags": ["..."], "registration_url": "..."}}"""
