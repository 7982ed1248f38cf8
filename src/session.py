"""Per-user session context: identity, approval flags, client-side storage.

A SessionContext is created on sign-in and closed on sign-out. Workflows
receive it explicitly instead of reading ambient state, and use it to mark
cached views stale after a mutation.
"""

from dataclasses import dataclass, field
from typing import MutableMapping

from src.config import OUTLOOK_PENDING_KEY, OUTLOOK_TOKEN_KEY, SessionKey


@dataclass
class SessionContext:
    user_id: str
    email: str | None = None
    is_approved: bool = False
    is_admin: bool = False
    # Browser-session storage (st.session_state in the app, a dict in tests)
    storage: MutableMapping = field(default_factory=dict)
    stale_views: set = field(default_factory=set)
    closed: bool = False

    def invalidate(self, *views: str):
        """Mark views as needing a refetch."""
        self.stale_views.update(views)

    def consume_stale(self, view: str) -> bool:
        """True (once) if `view` was invalidated since the last check."""
        if view in self.stale_views:
            self.stale_views.discard(view)
            return True
        return False

    def close(self):
        """Tear down client-held state on sign-out."""
        self.storage.pop(OUTLOOK_TOKEN_KEY, None)
        self.storage.pop(OUTLOOK_PENDING_KEY, None)
        self.storage.pop(SessionKey.SUPABASE_CLIENT, None)
        self.stale_views.clear()
        self.closed = True
