import streamlit as st

# Page config - MUST be first Streamlit command
st.set_page_config(
    page_title="Wolf Street",
    layout="wide"
)

import logging
from datetime import date

# Import from src modules
from src.config import (
    APP_NAME,
    DEFAULT_EVENT_TYPE,
    DEFAULT_MODEL,
    DEFAULT_TRAVEL_DAYS,
    EVENT_TYPE_MAP,
    EVENT_TYPES,
    ICON_MAP,
    OUTLOOK_CALLBACK_PAGE,
    SessionKey,
    View,
)
from src.utils import parse_date, parse_time, to_iso_date, format_short_date, safe_format
from src.auth import check_login, check_access, refresh_access, logout, set_user_approval
from src.database import (
    get_all_conferences,
    get_calendar_events,
    get_all_profiles,
    delete_calendar_event,
)
from src.llm import get_available_models
from src.validation import ValidationError
from src.calendar_sync import (
    TravelDays,
    event_display,
    get_event_color,
    create_calendar_event_for_conference,
    update_calendar_event_with_travel_days,
    list_linkable_calendar_events,
    link_calendar_event_with_dates,
    link_existing_calendar_event,
    fetch_import_candidates,
    import_calendar_events,
    InviteError,
    send_calendar_invite,
    add_conference,
    edit_conference,
    add_calendar_event,
    edit_calendar_event,
)
from src.outlook import (
    OutlookBridge,
    OutlookError,
    OutlookSetupRequired,
    OutlookSessionExpired,
    summarize_sync,
)
from src.ingestion import ingest_conference_from_url, save_ingested_conference, is_fallback

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("wolfstreet")

# Gate the entire app
session = check_login()
if session is None:
    st.stop()

# ============== Approval Gate ==============

if check_access(session) == "pending":
    st.title(APP_NAME)
    st.info(":material/hourglass_empty: Your account is waiting for admin approval.")
    st.caption(f"Signed in as {session.email}")
    col_check, col_out = st.columns(2)
    with col_check:
        if st.button("Check again", use_container_width=True, icon=":material/refresh:"):
            refresh_access(session)
            st.rerun()
    with col_out:
        if st.button("Sign out", use_container_width=True, icon=":material/logout:"):
            logout(session)
            st.rerun()
    st.stop()

# Custom CSS - Wolf Street dark theme
st.markdown("""
<style>
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    [data-testid="stDecoration"] {display: none;}
    .stDeployButton {display: none;}

    .stApp {
        background: linear-gradient(180deg, #0b0b12 0%, #161628 100%);
        color: #ffffff;
    }

    .stCaption, [data-testid="stCaptionContainer"] {
        color: #a1a1aa !important;
    }

    /* Event type badge */
    .event-badge {
        display: inline-block;
        padding: 2px 10px;
        border-radius: 999px;
        font-size: 0.75rem;
        font-weight: 600;
        color: #ffffff;
    }

    .conference-dates {
        color: #c4b5fd;
        font-size: 0.85rem;
    }
</style>
""", unsafe_allow_html=True)

# ============== Helpers ==============


def load_conferences() -> list:
    """Conferences for the current user, refetched when the view is stale."""
    stale = session.consume_stale(View.CONFERENCES)
    if stale or SessionKey.CONFERENCES not in st.session_state:
        st.session_state[SessionKey.CONFERENCES] = get_all_conferences(session.user_id)
    return st.session_state[SessionKey.CONFERENCES]


def load_calendar_events() -> list:
    """Calendar events for the current user, refetched when the view is stale."""
    stale = session.consume_stale(View.CALENDAR_EVENTS)
    if stale or SessionKey.CALENDAR_EVENTS not in st.session_state:
        st.session_state[SessionKey.CALENDAR_EVENTS] = get_calendar_events(session.user_id)
    return st.session_state[SessionKey.CALENDAR_EVENTS]


def date_range_label(start, end) -> str:
    if not start:
        return "Dates TBD"
    if not end or end == start:
        return safe_format(start, "%b %d, %Y")
    return f"{format_short_date(start)} - {safe_format(end, '%b %d, %Y')}"


def travel_inputs(key: str) -> TravelDays | None:
    """Travel-day controls; returns None when travel is not enabled."""
    enabled = st.checkbox("Add travel days", key=f"{key}_travel")
    col_before, col_after = st.columns(2)
    with col_before:
        before = st.number_input("Days before", min_value=0, max_value=14, value=DEFAULT_TRAVEL_DAYS,
                                 key=f"{key}_before", disabled=not enabled)
    with col_after:
        after = st.number_input("Days after", min_value=0, max_value=14, value=DEFAULT_TRAVEL_DAYS,
                                key=f"{key}_after", disabled=not enabled)
    return TravelDays.from_form(enabled, before, after)


def show_warning(result: dict):
    if result.get("warning"):
        st.toast(result["warning"], icon=":material/warning:")


# ============== UI Dialogs ==============

@st.dialog("Edit Conference")
def edit_conference_dialog(conference: dict):
    """Modal dialog for editing a conference and its linked event."""
    with st.form("edit_conference_form"):
        name = st.text_input("Name", value=conference.get("name") or "")
        col_start, col_end = st.columns(2)
        with col_start:
            start = st.date_input("Start date", value=parse_date(conference.get("start_date")))
        with col_end:
            end = st.date_input("End date", value=parse_date(conference.get("end_date")))
        location = st.text_input("Location", value=conference.get("location") or "")
        description = st.text_area("Description", value=conference.get("description") or "")
        tags = st.text_input("Tags (comma separated)", value=", ".join(conference.get("tags") or []))
        submitted = st.form_submit_button("Save", type="primary", use_container_width=True)

    if submitted:
        updates = {
            "name": name,
            "start_date": to_iso_date(start) if start else None,
            "end_date": to_iso_date(end) if end else None,
            "location": location,
            "description": description or None,
            "tags": tags,
        }
        try:
            result = edit_conference(session, conference, updates)
        except ValidationError as e:
            st.error(str(e))
            return
        except Exception as e:
            logger.exception("Failed to update conference %s", conference["id"])
            st.error(f"Failed to update conference: {e}")
            return
        show_warning(result)
        st.rerun()

    if conference.get("calendar_event_id"):
        st.divider()
        st.caption(":material/flight: Travel days on the linked calendar event")
        travel_days = travel_inputs(f"edit_{conference['id']}")
        if st.button("Update calendar event", use_container_width=True, icon=":material/event:"):
            try:
                update_calendar_event_with_travel_days(
                    session, conference["calendar_event_id"], conference, travel_days
                )
            except Exception as e:
                st.error(f"Calendar sync failed: {e}")
                return
            st.toast("Calendar event updated", icon=":material/check_circle:")
            st.rerun()


@st.dialog("Link Calendar Event")
def link_event_dialog(conference: dict):
    """Pick a recent calendar event to link; optionally adopt its dates."""
    events = list_linkable_calendar_events(session)
    if not events:
        st.info("No calendar events in the last 60 days.")
        return
    by_id = {e["id"]: e for e in events}
    choice = st.selectbox(
        "Calendar event",
        list(by_id.keys()),
        format_func=lambda eid: f"{by_id[eid]['title']} ({date_range_label(by_id[eid]['start_date'], by_id[eid].get('end_date'))})",
    )
    adopt_dates = st.checkbox("Use the event's dates for this conference", value=True)
    if st.button("Link", type="primary", use_container_width=True, icon=":material/link:"):
        try:
            if adopt_dates:
                link_calendar_event_with_dates(session, conference["id"], by_id[choice])
            else:
                link_existing_calendar_event(session, conference["id"], by_id[choice]["id"])
        except Exception as e:
            st.error(f"Failed to link event: {e}")
            return
        st.rerun()


def event_form_fields(event: dict) -> dict:
    """Calendar event form body (inside an st.form); returns the raw form values."""
    title = st.text_input("Title", value=event.get("title") or "")
    col_start, col_end = st.columns(2)
    with col_start:
        start = st.date_input("Start date", value=parse_date(event.get("start_date")) or date.today())
    with col_end:
        end = st.date_input("End date", value=parse_date(event.get("end_date")))
    all_day = st.checkbox("All day", value=event.get("all_day") is not False)
    col_from, col_to = st.columns(2)
    with col_from:
        start_time = st.time_input("Start time", value=parse_time(event.get("start_time")))
    with col_to:
        end_time = st.time_input("End time", value=parse_time(event.get("end_time")))
    location = st.text_input("Location", value=event.get("location") or "")
    description = st.text_area("Description", value=event.get("description") or "")

    current_type = event.get("event_type") or DEFAULT_EVENT_TYPE
    col_type, col_custom = st.columns(2)
    with col_type:
        event_type = st.selectbox(
            "Type", EVENT_TYPES,
            index=EVENT_TYPES.index(current_type) if current_type in EVENT_TYPES else EVENT_TYPES.index("custom"),
            format_func=lambda t: EVENT_TYPE_MAP.get(t, {}).get("label", "Custom"),
        )
    with col_custom:
        type_custom = st.text_input("Custom type label", value=event.get("type_custom") or "")

    icon_options = [None] + list(ICON_MAP.keys())
    col_icon, col_color = st.columns(2)
    with col_icon:
        icon_name = st.selectbox(
            "Icon", icon_options,
            index=icon_options.index(event.get("icon_name")) if event.get("icon_name") in ICON_MAP else 0,
            format_func=lambda name: "Type default" if name is None else f"{ICON_MAP[name]} {name}",
        )
    with col_color:
        custom_color = st.checkbox("Custom color", value=bool(event.get("color_hex")))
        color_hex = st.color_picker("Color", value=event.get("color_hex") or get_event_color(None, event_type))
    invite_email = st.text_input("Invite email (optional)", value=event.get("invite_email") or "")

    return {
        "title": title,
        "start_date": to_iso_date(start) if start else None,
        "end_date": to_iso_date(end) if end else None,
        "all_day": all_day,
        "start_time": start_time.strftime("%H:%M") if start_time else None,
        "end_time": end_time.strftime("%H:%M") if end_time else None,
        "location": location,
        "description": description,
        "event_type": event_type,
        "type_custom": type_custom,
        "icon_name": icon_name,
        "color_hex": color_hex if custom_color else None,
        "invite_email": invite_email,
    }


@st.dialog("New Calendar Event")
def new_event_dialog():
    with st.form("new_event_form"):
        form = event_form_fields({})
        submitted = st.form_submit_button("Create", type="primary", use_container_width=True)

    if submitted:
        try:
            event = add_calendar_event(session, form)
        except ValidationError as e:
            st.error(str(e))
            return
        except Exception as e:
            logger.exception("Failed to create calendar event")
            st.error(f"Failed to create event: {e}")
            return
        st.toast(f"Created {event['title']}", icon=":material/check_circle:")
        st.rerun()


@st.dialog("Edit Calendar Event")
def edit_event_dialog(event: dict, linked_conference: dict | None):
    """Edit an event; linked conferences follow title, dates and location."""
    with st.form("edit_event_form"):
        form = event_form_fields(event)
        submitted = st.form_submit_button("Save", type="primary", use_container_width=True)

    if submitted:
        try:
            result = edit_calendar_event(session, event, form, linked_conference)
        except ValidationError as e:
            st.error(str(e))
            return
        except Exception as e:
            logger.exception("Failed to update calendar event %s", event["id"])
            st.error(f"Failed to update event: {e}")
            return
        show_warning(result)
        st.rerun()


@st.dialog("Send Calendar Invite")
def send_invite_dialog(event: dict):
    st.markdown(f"Send **{event['title']}** as a calendar invite.")
    test_email = st.text_input("Send to (optional)", placeholder="Defaults to the event's invite address")
    if st.button("Send", type="primary", use_container_width=True, icon=":material/send:"):
        try:
            with st.spinner("Sending..."):
                result = send_calendar_invite(event["id"], test_email.strip() or None)
        except InviteError as e:
            st.error(str(e))
            return
        st.toast(f"Invite sent to {result['recipient']}", icon=":material/mark_email_read:")
        st.rerun()


@st.dialog("Delete Event")
def delete_event_dialog(event: dict):
    st.warning(f"This will permanently delete **{event['title']}**.")
    col_yes, col_no = st.columns(2)
    with col_yes:
        if st.button("Delete", type="primary", use_container_width=True, icon=":material/delete_forever:"):
            delete_calendar_event(event["id"])
            session.invalidate(View.CALENDAR_EVENTS, View.CONFERENCES)
            st.rerun()
    with col_no:
        if st.button("Cancel", use_container_width=True):
            st.rerun()


# ============== Session State ==============

if SessionKey.ACTIVE_VIEW not in st.session_state:
    st.session_state[SessionKey.ACTIVE_VIEW] = st.query_params.get("page", "conferences")
if SessionKey.SELECTED_MODEL not in st.session_state:
    st.session_state[SessionKey.SELECTED_MODEL] = DEFAULT_MODEL

# Get available models (based on configured API keys)
available_models = get_available_models() or [DEFAULT_MODEL]

outlook = OutlookBridge(session)

# ============== Outlook OAuth Callback ==============
# Microsoft redirects back to MICROSOFT_REDIRECT_URI (?page=calendar) with ?code=...

if st.query_params.get("code"):
    try:
        if outlook.handle_redirect(st.query_params):
            st.session_state[SessionKey.ACTIVE_VIEW] = OUTLOOK_CALLBACK_PAGE
            st.toast("Connected to Outlook", icon=":material/check_circle:")
    except OutlookError as e:
        st.session_state[SessionKey.ACTIVE_VIEW] = OUTLOOK_CALLBACK_PAGE
        st.error(str(e))
    st.query_params.clear()

# ============== Top Navigation ==============

st.markdown(f"#### {APP_NAME}")
st.caption(f"Signed in as {session.email}")
nav_cols = st.columns(5 if session.is_admin else 4)
with nav_cols[0]:
    if st.button("Conferences", key="nav_conferences", use_container_width=True, icon=":material/co_present:"):
        st.session_state[SessionKey.ACTIVE_VIEW] = "conferences"
        st.rerun()
with nav_cols[1]:
    if st.button("Calendar", key="nav_calendar", use_container_width=True, icon=":material/calendar_month:"):
        st.session_state[SessionKey.ACTIVE_VIEW] = "calendar"
        st.rerun()
if session.is_admin:
    with nav_cols[2]:
        if st.button("Users", key="nav_users", use_container_width=True, icon=":material/admin_panel_settings:"):
            st.session_state[SessionKey.ACTIVE_VIEW] = "users"
            st.rerun()
with nav_cols[-2]:
    selected = st.session_state[SessionKey.SELECTED_MODEL]
    st.session_state[SessionKey.SELECTED_MODEL] = st.selectbox(
        "Model",
        available_models,
        index=available_models.index(selected) if selected in available_models else 0,
        key="nav_model",
        label_visibility="collapsed"
    )
with nav_cols[-1]:
    if st.button("Sign out", key="nav_sign_out", use_container_width=True, icon=":material/logout:"):
        logout(session)
        st.rerun()

# ============== Main Content ==============

active_view = st.session_state[SessionKey.ACTIVE_VIEW]

if active_view == "conferences":
    conferences = load_conferences()

    tab_list, tab_add, tab_url, tab_import = st.tabs([
        ":material/list: Conferences",
        ":material/add: Add",
        ":material/link: From URL",
        ":material/download: Import from Calendar",
    ])

    with tab_add:
        with st.form("new_conference_form", clear_on_submit=True):
            name = st.text_input("Name", placeholder="I/ITSEC 2025")
            col_start, col_end = st.columns(2)
            with col_start:
                start = st.date_input("Start date", value=None)
            with col_end:
                end = st.date_input("End date", value=None)
            location = st.text_input("Location", placeholder="Orlando, FL")
            description = st.text_area("Description (optional)")
            tags = st.text_input("Tags (optional, comma separated)")
            if st.form_submit_button("Create Conference", type="primary", use_container_width=True, icon=":material/add:"):
                try:
                    result = add_conference(
                        session,
                        name,
                        to_iso_date(start) if start else None,
                        to_iso_date(end) if end else None,
                        location,
                        description,
                        tags,
                    )
                except ValidationError as e:
                    st.warning(str(e))
                except Exception as e:
                    logger.exception("Failed to create conference")
                    st.error(f"Failed to create conference: {e}")
                else:
                    show_warning(result)
                    st.toast(f"Created {result['conference']['name']}", icon=":material/check_circle:")
                    st.rerun()

    with tab_url:
        st.caption(":material/auto_awesome: Paste a conference website to auto-fill the details")
        col_url, col_go = st.columns([4, 1])
        with col_url:
            url = st.text_input("Conference URL", key=SessionKey.INGEST_URL,
                                placeholder="https://www.iitsec.org", label_visibility="collapsed")
        with col_go:
            if st.button("Parse", type="primary", use_container_width=True, icon=":material/travel_explore:"):
                try:
                    with st.spinner("Reading website..."):
                        response = ingest_conference_from_url(
                            session, url, st.session_state[SessionKey.SELECTED_MODEL]
                        )
                except ValidationError as e:
                    st.warning(str(e))
                else:
                    if response["success"]:
                        st.session_state[SessionKey.INGEST_RESULT] = {"url": url, **response}
                    else:
                        st.session_state.pop(SessionKey.INGEST_RESULT, None)
                        st.error(response["error"])

        ingest = st.session_state.get(SessionKey.INGEST_RESULT)
        if ingest:
            parsed = ingest["conference"]
            if is_fallback(ingest):
                st.warning("Couldn't read that website. A placeholder was created; please fill in the details.")
            else:
                st.success("Conference details extracted. Review and save.")

            with st.form("confirm_ingest_form"):
                name = st.text_input("Name", value=parsed.get("name") or "")
                col_start, col_end = st.columns(2)
                with col_start:
                    start = st.date_input("Start date", value=parse_date(parsed.get("start_date")))
                with col_end:
                    end = st.date_input("End date", value=parse_date(parsed.get("end_date")))
                location = st.text_input("Location", value=parsed.get("location") or "")
                description = st.text_area("Description", value=parsed.get("short_description") or "")
                tags = st.text_input("Tags", value=", ".join(parsed.get("tags") or []))
                if parsed.get("venue"):
                    st.caption(f":material/location_on: {parsed['venue']}")
                if parsed.get("registration_url"):
                    st.caption(f":material/how_to_reg: {parsed['registration_url']}")
                confirm = st.form_submit_button("Save Conference", type="primary", use_container_width=True)

            travel_days = travel_inputs("ingest")

            if confirm:
                edited = {
                    "name": name,
                    "start_date": to_iso_date(start) if start else None,
                    "end_date": to_iso_date(end) if end else None,
                    "location": location,
                    "short_description": description or None,
                    "tags": [t.strip() for t in tags.split(",") if t.strip()],
                }
                try:
                    result = save_ingested_conference(session, ingest["url"], edited, travel_days)
                except ValidationError as e:
                    st.warning(str(e))
                except Exception as e:
                    logger.exception("Failed to save ingested conference")
                    st.error(f"Failed to save conference: {e}")
                else:
                    show_warning(result)
                    st.session_state.pop(SessionKey.INGEST_RESULT, None)
                    st.toast(f"Saved {result['conference']['name']}", icon=":material/check_circle:")
                    st.rerun()

    with tab_import:
        st.caption("Calendar events from the last 30 days that look like conferences and aren't linked yet.")
        candidates = fetch_import_candidates(session)
        if not candidates:
            st.info("No conference-like calendar events to import.")
        else:
            by_id = {e["id"]: e for e in candidates}
            selected_ids = st.multiselect(
                "Events to import",
                list(by_id.keys()),
                key=SessionKey.IMPORT_SELECTION,
                format_func=lambda eid: f"{by_id[eid]['title']} ({date_range_label(by_id[eid]['start_date'], by_id[eid].get('end_date'))})",
            )
            if st.button(f"Import {len(selected_ids)} event(s)", type="primary", icon=":material/download:"):
                try:
                    created = import_calendar_events(session, candidates, selected_ids)
                except ValidationError as e:
                    st.warning(str(e))
                except Exception as e:
                    logger.exception("Calendar import failed")
                    st.error(f"Import failed: {e}")
                else:
                    st.toast(f"Imported {len(created)} conference(s)", icon=":material/check_circle:")
                    st.session_state.pop(SessionKey.IMPORT_SELECTION, None)
                    st.rerun()

    with tab_list:
        if not conferences:
            st.info("No conferences yet. Add one, paste a URL, or import from your calendar.")
        cols = st.columns(3)
        for idx, c in enumerate(conferences):
            with cols[idx % 3]:
                with st.container(border=True):
                    st.markdown(f"#### {c['name']}")
                    st.markdown(
                        f"<span class='conference-dates'>{date_range_label(c.get('start_date'), c.get('end_date'))}</span>",
                        unsafe_allow_html=True,
                    )
                    if c.get("location"):
                        st.caption(f":material/location_on: {c['location']}")
                    if c.get("tags"):
                        st.caption(" ".join(f"`{t}`" for t in c["tags"]))
                    if c.get("calendar_event_id"):
                        st.caption(":material/event_available: On calendar")
                    else:
                        st.caption(":material/event_busy: Not on calendar")

                    col_edit, col_cal = st.columns(2)
                    with col_edit:
                        if st.button("Edit", key=f"edit_{c['id']}", use_container_width=True, icon=":material/edit:"):
                            edit_conference_dialog(c)
                    with col_cal:
                        if not c.get("calendar_event_id"):
                            if st.button("Link", key=f"link_{c['id']}", use_container_width=True, icon=":material/link:"):
                                link_event_dialog(c)
                    if not c.get("calendar_event_id") and c.get("start_date"):
                        if st.button("Add to calendar", key=f"addcal_{c['id']}", use_container_width=True,
                                     icon=":material/event:"):
                            try:
                                create_calendar_event_for_conference(session, c)
                            except Exception as e:
                                st.error(f"Calendar sync failed: {e}")
                            else:
                                st.rerun()

elif active_view == "calendar":
    events = load_calendar_events()
    conferences = load_conferences()
    linked = {c["calendar_event_id"]: c for c in conferences if c.get("calendar_event_id")}

    # Outlook connection
    with st.container(border=True):
        col_status, col_action = st.columns([3, 2])
        with col_status:
            st.markdown("##### :material/sync: Outlook")
            if outlook.is_connected:
                st.caption("Connected")
            elif outlook.pending_auth_url:
                st.caption("Waiting for Microsoft sign-in")
            else:
                st.caption("Not connected")
        with col_action:
            if outlook.is_connected:
                if st.button(f"Sync {len(events)} event(s)", type="primary", use_container_width=True,
                             icon=":material/cloud_upload:", disabled=not events):
                    try:
                        with st.spinner("Syncing to Outlook..."):
                            result = outlook.sync_events(events)
                    except OutlookSessionExpired as e:
                        st.warning(f"Outlook session expired. {e}")
                    except OutlookError as e:
                        st.error(str(e))
                    else:
                        level, title, message = summarize_sync(result, len(events))
                        getattr(st, level)(f"**{title}**: {message}")
                if st.button("Disconnect", use_container_width=True, icon=":material/link_off:"):
                    outlook.disconnect()
                    st.rerun()
            else:
                if st.button("Connect Outlook", use_container_width=True, icon=":material/login:"):
                    try:
                        outlook.connect()
                    except OutlookSetupRequired as e:
                        st.warning(f"Setup required: {e}")
                    except OutlookError as e:
                        st.error(str(e))
                if outlook.pending_auth_url:
                    st.link_button("Continue to Microsoft", outlook.pending_auth_url,
                                   use_container_width=True)

    st.divider()

    if st.button("New event", type="primary", icon=":material/add:"):
        new_event_dialog()

    if not events:
        st.info("No calendar events yet.")
    for e in events:
        display = event_display(e)
        with st.container(border=True):
            col_info, col_actions = st.columns([4, 2])
            with col_info:
                st.markdown(
                    f"{display['icon']} **{e['title']}** "
                    f"<span class='event-badge' style='background:{display['color']}'>{display['label']}</span>",
                    unsafe_allow_html=True,
                )
                st.caption(date_range_label(e.get("start_date"), e.get("end_date")))
                if e.get("location"):
                    st.caption(f":material/location_on: {e['location']}")
                if e["id"] in linked:
                    st.caption(f":material/link: {linked[e['id']]['name']}")
            with col_actions:
                col_a, col_b, col_c = st.columns(3)
                with col_a:
                    if st.button("", key=f"edit_event_{e['id']}", icon=":material/edit:", help="Edit event"):
                        edit_event_dialog(e, linked.get(e["id"]))
                with col_b:
                    if st.button("", key=f"invite_{e['id']}", icon=":material/forward_to_inbox:", help="Send invite"):
                        send_invite_dialog(e)
                with col_c:
                    if st.button("", key=f"del_event_{e['id']}", icon=":material/delete:", help="Delete event"):
                        delete_event_dialog(e)

elif active_view == "users" and session.is_admin:
    st.title("Users")
    st.caption("Approve new accounts and manage admins.")
    for p in get_all_profiles():
        with st.container(border=True):
            col_who, col_ok, col_admin = st.columns([4, 1, 1])
            with col_who:
                st.markdown(f"**{p.get('full_name') or p.get('email')}**")
                st.caption(p.get("email") or "")
            with col_ok:
                approved = st.toggle("Approved", value=bool(p.get("is_approved")), key=f"approved_{p['id']}")
            with col_admin:
                admin = st.toggle("Admin", value=bool(p.get("is_admin")), key=f"admin_{p['id']}",
                                  disabled=p["id"] == session.user_id)
            if approved != bool(p.get("is_approved")) or admin != bool(p.get("is_admin")):
                try:
                    set_user_approval(session, p["id"], is_approved=approved, is_admin=admin)
                except PermissionError as e:
                    st.error(str(e))
                else:
                    st.toast("Access updated", icon=":material/check_circle:")
                    st.rerun()

else:
    st.session_state[SessionKey.ACTIVE_VIEW] = "conferences"
    st.rerun()
