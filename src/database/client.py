"""Supabase client initialization with retry logic."""

import time
import functools
import streamlit as st
from supabase import create_client

from src.config import SessionKey, get_secret

_override_client = None


@st.cache_resource
def _create_service_client():
    """Service-role client shared by the process. Bypasses row-level security."""
    return create_client(
        get_secret("SUPABASE_URL"),
        get_secret("SUPABASE_SERVICE_KEY"),
    )


def create_user_client():
    """New anon-key client. Once signed in, its queries run as that user."""
    return create_client(
        get_secret("SUPABASE_URL"),
        get_secret("SUPABASE_ANON_KEY"),
    )


def get_supabase_client():
    """Client for the current browser session, created on first use.

    Sign-in sets the auth header on the client it runs on, so each
    Streamlit session keeps its own in st.session_state.
    """
    if _override_client is not None:
        return _override_client
    client = st.session_state.get(SessionKey.SUPABASE_CLIENT)
    if client is None:
        client = create_user_client()
        st.session_state[SessionKey.SUPABASE_CLIENT] = client
    return client


def get_service_client():
    """Service-role client, for admin-only profile reads and writes."""
    if _override_client is not None:
        return _override_client
    return _create_service_client()


def set_supabase_client(client):
    """Route every database call to `client` (a fake in tests).

    Pass None to go back to per-session and service clients.
    """
    global _override_client
    _override_client = client


def with_retry(max_retries: int = 3, delay: float = 0.5):
    """Decorator to retry database operations on transient network errors.

    Catches httpx.ReadError and similar connection issues, retrying with
    exponential backoff. Only safe for reads and idempotent writes.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            last_error = None
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    error_type = type(e).__name__
                    # Retry on network/connection errors
                    if "ReadError" in error_type or "ConnectError" in error_type or "TimeoutException" in error_type:
                        last_error = e
                        if attempt < max_retries - 1:
                            time.sleep(delay * (2 ** attempt))  # Exponential backoff
                            continue
                    raise
            raise last_error
        return wrapper
    return decorator


def first_row(result) -> dict | None:
    """First row of a query result, or None.

    maybe_single() returns None instead of an empty response on some
    postgrest versions, so both shapes are handled.
    """
    if result is None or not result.data:
        return None
    if isinstance(result.data, list):
        return result.data[0]
    return result.data
