"""Microsoft Outlook backend actions: OAuth URL, code exchange, event push.

`handle_outlook_action` answers the same payloads the browser-side bridge
sends ({"action": "auth_url" | "exchange_token" | "sync", ...}) and always
returns a JSON-able dict; nothing here raises for remote failures.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from urllib.parse import urlencode

import requests
from dateutil import tz as dateutil_tz

from src.config import (
    DEFAULT_EVENT_DURATION_MINUTES,
    HTTP_TIMEOUT_SECONDS,
    MICROSOFT_AUTHORIZE_URL,
    MICROSOFT_GRAPH_URL,
    MICROSOFT_TOKEN_URL,
    OUTLOOK_SCOPES,
    get_secret,
)
from src.utils import combine_date_time, parse_date, shift_date

logger = logging.getLogger(__name__)

NOT_CONFIGURED = {
    "error": "Microsoft integration not configured",
    "message": "Please add MICROSOFT_CLIENT_ID, MICROSOFT_CLIENT_SECRET, and MICROSOFT_REDIRECT_URI secrets",
}


@dataclass
class OutlookConfig:
    client_id: str
    client_secret: str = ""
    redirect_uri: str = ""

    @classmethod
    def from_secrets(cls) -> "OutlookConfig":
        return cls(
            client_id=get_secret("MICROSOFT_CLIENT_ID"),
            client_secret=get_secret("MICROSOFT_CLIENT_SECRET"),
            redirect_uri=get_secret("MICROSOFT_REDIRECT_URI"),
        )

    @property
    def configured(self) -> bool:
        return bool(self.client_id)


def build_auth_url(config: OutlookConfig) -> str:
    """Authorization-code URL for the Outlook consent screen."""
    params = {
        "client_id": config.client_id,
        "response_type": "code",
        "redirect_uri": config.redirect_uri,
        "response_mode": "query",
        "scope": OUTLOOK_SCOPES,
    }
    return f"{MICROSOFT_AUTHORIZE_URL}?{urlencode(params)}"


def exchange_code(config: OutlookConfig, code: str, http=requests) -> dict:
    """Trade an authorization code for access/refresh tokens."""
    if not code:
        return {"error": "Missing authorization code"}
    try:
        response = http.post(
            MICROSOFT_TOKEN_URL,
            data={
                "client_id": config.client_id,
                "client_secret": config.client_secret,
                "code": code,
                "redirect_uri": config.redirect_uri,
                "grant_type": "authorization_code",
                "scope": OUTLOOK_SCOPES,
            },
            timeout=HTTP_TIMEOUT_SECONDS,
        )
        tokens = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Token exchange request failed: %s", e)
        return {"error": f"Failed to exchange token: {e}"}

    if tokens.get("error"):
        logger.error("Token exchange error: %s", tokens.get("error"))
        return {"error": tokens.get("error_description") or "Failed to exchange token"}

    return {
        "accessToken": tokens.get("access_token"),
        "refreshToken": tokens.get("refresh_token"),
        "expiresIn": tokens.get("expires_in"),
    }


GRAPH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _graph_date(day: str) -> str:
    return f"{parse_date(day).isoformat()}T00:00:00"


def _graph_utc(value: datetime) -> str:
    return value.astimezone(dateutil_tz.UTC).strftime(GRAPH_DATETIME_FORMAT)


def to_outlook_event(event: dict) -> dict:
    """Translate a calendar event row into a Graph event body (times in UTC)."""
    all_day = bool(event.get("all_day")) or not event.get("start_time")
    start_date = event["start_date"]
    end_date = event.get("end_date") or start_date

    if all_day:
        # Graph all-day events run midnight to midnight, end exclusive
        start = _graph_date(start_date)
        end = _graph_date(shift_date(end_date, 1))
    else:
        # Wall-clock times are in the event timezone; Graph gets them as UTC
        start_at = combine_date_time(start_date, event["start_time"])
        if event.get("end_time"):
            end_at = combine_date_time(end_date, event["end_time"])
        else:
            end_at = start_at + timedelta(minutes=DEFAULT_EVENT_DURATION_MINUTES)
        start, end = _graph_utc(start_at), _graph_utc(end_at)

    outlook_event = {
        "subject": event.get("title"),
        "body": {"contentType": "text", "content": event.get("description") or ""},
        "start": {"dateTime": start, "timeZone": "UTC"},
        "end": {"dateTime": end, "timeZone": "UTC"},
        "isAllDay": all_day,
    }
    if event.get("location"):
        outlook_event["location"] = {"displayName": event["location"]}
    return outlook_event


def _graph_error_message(response) -> str:
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    return (data.get("error") or {}).get("message") or "Failed to create event"


def sync_events(access_token: str, events: list, http=requests) -> dict:
    """Create each event in the user's Outlook calendar, one request at a time.

    Every event is attempted; failures are collected alongside successes.
    """
    if not access_token:
        return {"error": "Missing Microsoft access token"}
    if not events:
        return {"error": "No events to sync"}

    results = []
    errors = []
    for event in events:
        try:
            response = http.post(
                f"{MICROSOFT_GRAPH_URL}/me/events",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
                json=to_outlook_event(event),
                timeout=HTTP_TIMEOUT_SECONDS,
            )
            if not response.ok:
                message = _graph_error_message(response)
                logger.error("Graph API rejected event %s: %s", event.get("id"), message)
                errors.append({"eventId": event.get("id"), "error": message})
            else:
                results.append({"eventId": event.get("id"), "outlookId": response.json().get("id"), "success": True})
        except (requests.RequestException, ValueError, KeyError) as e:
            logger.error("Error syncing event %s: %s", event.get("id"), e)
            errors.append({"eventId": event.get("id"), "error": str(e)})

    return {
        "success": len(errors) == 0,
        "synced": len(results),
        "failed": len(errors),
        "results": results,
        "errors": errors,
    }


def handle_outlook_action(payload: dict, config: OutlookConfig = None, http=requests) -> dict:
    """Dispatch an Outlook bridge request payload."""
    config = config or OutlookConfig.from_secrets()
    if not config.configured:
        return dict(NOT_CONFIGURED)

    action = payload.get("action", "sync")
    if action == "auth_url":
        return {"authUrl": build_auth_url(config)}
    if action == "exchange_token":
        return exchange_code(config, payload.get("code"), http=http)
    if action == "sync":
        return sync_events(payload.get("accessToken"), payload.get("events"), http=http)
    return {"error": "Invalid action"}
