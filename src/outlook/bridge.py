"""Client-held Outlook connection: OAuth callback, token storage, push sync.

Tokens live only in the session's browser storage under OUTLOOK_TOKEN_KEY.
There is no refresh-token exchange: once the access token expires the user
reconnects.

States:
    DISCONNECTED            no usable token
    AUTHORIZATION_PENDING   consent URL issued, waiting for the redirect
    CONNECTED               token present and not expired
"""

import json
import logging
import time
from dataclasses import dataclass

from src.config import OUTLOOK_CALLBACK_PAGE, OUTLOOK_PENDING_KEY, OUTLOOK_TOKEN_KEY
from src.outlook.graph import handle_outlook_action
from src.session import SessionContext

logger = logging.getLogger(__name__)


class ConnectionState:
    DISCONNECTED = "disconnected"
    AUTHORIZATION_PENDING = "authorization_pending"
    CONNECTED = "connected"


class OutlookError(Exception):
    """Base class for Outlook bridge failures."""


class OutlookSetupRequired(OutlookError):
    """The server has no Microsoft client credentials."""


class OutlookConnectionError(OutlookError):
    """The OAuth round trip failed."""


class OutlookNotConnected(OutlookError):
    """Sync attempted without a connection."""


class OutlookSessionExpired(OutlookError):
    """The stored access token has expired; reconnect required."""


@dataclass
class OutlookTokens:
    access_token: str
    refresh_token: str | None
    expires_at: int  # epoch milliseconds

    def expired(self, now_ms: int) -> bool:
        return self.expires_at <= now_ms

    def to_json(self) -> str:
        return json.dumps({
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "expiresAt": self.expires_at,
        })

    @classmethod
    def from_json(cls, raw: str) -> "OutlookTokens":
        data = json.loads(raw)
        return cls(
            access_token=data["accessToken"],
            refresh_token=data.get("refreshToken"),
            expires_at=int(data["expiresAt"]),
        )


def _now_ms() -> int:
    return int(time.time() * 1000)


class OutlookBridge:
    """Outlook connection for one session.

    `invoke` is the proxied backend call (payload dict -> response dict);
    `clock` returns the current epoch time in milliseconds.
    """

    def __init__(self, session: SessionContext, invoke=handle_outlook_action, clock=_now_ms):
        self.session = session
        self.invoke = invoke
        self.clock = clock

    # ---------- token storage ----------

    def load_tokens(self) -> OutlookTokens | None:
        """Stored tokens if present and still valid; stale or corrupt entries are dropped."""
        raw = self.session.storage.get(OUTLOOK_TOKEN_KEY)
        if not raw:
            return None
        try:
            tokens = OutlookTokens.from_json(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable Outlook tokens")
            self._clear_tokens()
            return None
        if tokens.expired(self.clock()):
            self._clear_tokens()
            return None
        return tokens

    def _store_tokens(self, tokens: OutlookTokens):
        self.session.storage[OUTLOOK_TOKEN_KEY] = tokens.to_json()

    def _clear_tokens(self):
        self.session.storage.pop(OUTLOOK_TOKEN_KEY, None)

    # ---------- state machine ----------

    @property
    def state(self) -> str:
        if self.load_tokens():
            return ConnectionState.CONNECTED
        if self.session.storage.get(OUTLOOK_PENDING_KEY):
            return ConnectionState.AUTHORIZATION_PENDING
        return ConnectionState.DISCONNECTED

    @property
    def is_connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED

    def connect(self) -> str:
        """Return the Microsoft consent URL to redirect the browser to."""
        data = self.invoke({"action": "auth_url"})
        if data.get("error"):
            raise OutlookSetupRequired(data.get("message") or "Microsoft integration needs to be configured")
        if not data.get("authUrl"):
            raise OutlookConnectionError("Failed to initiate Outlook connection")
        self.session.storage[OUTLOOK_PENDING_KEY] = data["authUrl"]
        return data["authUrl"]

    @property
    def pending_auth_url(self) -> str | None:
        """Consent URL while authorization is pending."""
        if self.state != ConnectionState.AUTHORIZATION_PENDING:
            return None
        url = self.session.storage.get(OUTLOOK_PENDING_KEY)
        return url if isinstance(url, str) else None

    def handle_callback(self, query_params, current_page: str) -> bool:
        """Finish the OAuth flow if the redirect carried a `code`.

        Only acts on the calendar page. Returns True when a connection was made.
        """
        code = query_params.get("code")
        if not code or OUTLOOK_CALLBACK_PAGE not in (current_page or ""):
            return False

        data = self.invoke({"action": "exchange_token", "code": code})
        self.session.storage.pop(OUTLOOK_PENDING_KEY, None)
        if data.get("error") or not data.get("accessToken"):
            logger.error("OAuth callback error: %s", data.get("error"))
            raise OutlookConnectionError(data.get("error") or "Failed to connect to Outlook")

        self._store_tokens(OutlookTokens(
            access_token=data["accessToken"],
            refresh_token=data.get("refreshToken"),
            expires_at=self.clock() + int(data.get("expiresIn") or 0) * 1000,
        ))
        logger.info("Connected to Outlook for user %s", self.session.user_id)
        return True

    def handle_redirect(self, query_params) -> bool:
        """handle_callback for a page load, using the page named in the query.

        MICROSOFT_REDIRECT_URI must carry ?page=calendar; a bare ?code= is ignored.
        """
        return self.handle_callback(query_params, query_params.get("page", ""))

    def disconnect(self):
        """Forget the tokens locally; no remote revocation."""
        self._clear_tokens()
        self.session.storage.pop(OUTLOOK_PENDING_KEY, None)

    def sync_events(self, events: list) -> dict:
        """Push events to Outlook; returns the per-event summary from the backend."""
        raw = self.session.storage.get(OUTLOOK_TOKEN_KEY)
        if not raw:
            raise OutlookNotConnected("Please connect to Outlook first")

        tokens = self.load_tokens()
        if tokens is None:
            raise OutlookSessionExpired("Please reconnect to Outlook")

        data = self.invoke({
            "action": "sync",
            "accessToken": tokens.access_token,
            "events": events,
        })
        if data.get("error"):
            raise OutlookError(data["error"])
        return data


def summarize_sync(result: dict, total: int) -> tuple:
    """(level, title, message) for a sync summary: 'success' | 'warning' | 'error'."""
    synced = result.get("synced", 0)
    if result.get("success"):
        return "success", "Events synced", f"Successfully synced {synced} event(s) to Outlook"
    if synced > 0:
        return "warning", "Partial sync", f"Synced {synced} of {total} events. {result.get('failed', 0)} failed."
    return "error", "Sync failed", "Failed to sync events to Outlook"
