"""Supabase email/password sign-in and the admin approval gate."""

import logging

import streamlit as st

from src.config import APP_NAME, SessionKey
from src.database import get_supabase_client, get_profile, update_profile_flags
from src.session import SessionContext

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Sign-in was rejected."""


def sign_in(email: str, password: str, storage=None) -> SessionContext:
    """Authenticate with Supabase and build a session from the user's profile."""
    if not email or not password:
        raise AuthError("Email and password are required")
    try:
        response = get_supabase_client().auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as e:
        logger.warning("Sign-in failed for %s: %s", email, e)
        raise AuthError("Invalid email or password") from e

    user = getattr(response, "user", None)
    if user is None:
        raise AuthError("Invalid email or password")

    profile = get_profile(user.id) or {}
    logger.info("Signed in %s (approved=%s)", email, bool(profile.get("is_approved")))
    return SessionContext(
        user_id=user.id,
        email=profile.get("email") or email,
        is_approved=bool(profile.get("is_approved")),
        is_admin=bool(profile.get("is_admin")),
        storage=storage if storage is not None else {},
    )


def sign_out(session: SessionContext):
    """End the Supabase session and drop client-held state."""
    try:
        get_supabase_client().auth.sign_out()
    except Exception as e:
        logger.warning("Supabase sign-out failed: %s", e)
    session.close()


def refresh_access(session: SessionContext) -> SessionContext:
    """Re-read approval flags, e.g. after an admin approves a pending user."""
    profile = get_profile(session.user_id) or {}
    session.is_approved = bool(profile.get("is_approved"))
    session.is_admin = bool(profile.get("is_admin"))
    return session


def check_access(session: SessionContext) -> str:
    """'approved' or 'pending'. Admins are always approved."""
    if session.is_admin or session.is_approved:
        return "approved"
    return "pending"


def set_user_approval(session: SessionContext, user_id: str, is_approved: bool = None, is_admin: bool = None):
    """Toggle another user's approval/admin flags. Admin-only."""
    if not session.is_admin:
        raise PermissionError("Only admins can change user access")
    updates = {}
    if is_approved is not None:
        updates["is_approved"] = is_approved
    if is_admin is not None:
        updates["is_admin"] = is_admin
    if not updates:
        return
    update_profile_flags(user_id, updates)
    logger.info("Updated access for %s: %s", user_id, updates)


def check_login() -> SessionContext | None:
    """Returns the signed-in session, or renders the login form and returns None."""
    session = st.session_state.get(SessionKey.SESSION)
    if session is not None and not session.closed:
        return session

    st.title(APP_NAME)
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted:
        try:
            session = sign_in(email, password, storage=st.session_state)
        except AuthError as e:
            st.error(str(e))
            return None
        st.session_state[SessionKey.SESSION] = session
        st.rerun()
    return None


def logout(session: SessionContext):
    """Sign out and clear the app's cached state."""
    sign_out(session)
    for key in list(st.session_state.keys()):
        del st.session_state[key]
