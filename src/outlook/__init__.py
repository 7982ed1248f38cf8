# Outlook layer - backend Graph actions and the client-held connection

from src.outlook.graph import (
    OutlookConfig,
    build_auth_url,
    exchange_code,
    to_outlook_event,
    sync_events,
    handle_outlook_action,
)

from src.outlook.bridge import (
    ConnectionState,
    OutlookError,
    OutlookSetupRequired,
    OutlookConnectionError,
    OutlookNotConnected,
    OutlookSessionExpired,
    OutlookTokens,
    OutlookBridge,
    summarize_sync,
)

__all__ = [
    # Graph
    "OutlookConfig",
    "build_auth_url",
    "exchange_code",
    "to_outlook_event",
    "sync_events",
    "handle_outlook_action",
    # Bridge
    "ConnectionState",
    "OutlookError",
    "OutlookSetupRequired",
    "OutlookConnectionError",
    "OutlookNotConnected",
    "OutlookSessionExpired",
    "OutlookTokens",
    "OutlookBridge",
    "summarize_sync",
]
