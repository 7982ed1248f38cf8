"""
Unit tests for sign-in and the approval gate.
"""
import pytest

from src.auth import AuthError, sign_in, sign_out, check_access, set_user_approval
from src.config import OUTLOOK_TOKEN_KEY
from src.session import SessionContext


@pytest.fixture
def users(db):
    db.users[("admin@example.com", "pw")] = "admin-1"
    db.users[("new@example.com", "pw")] = "user-2"
    db.seed(
        "profiles",
        {"id": "admin-1", "email": "admin@example.com", "is_approved": True, "is_admin": True},
        {"id": "user-2", "email": "new@example.com", "is_approved": False, "is_admin": False},
    )
    return db


class TestSignIn:

    def test_builds_session_from_profile(self, users):
        session = sign_in("admin@example.com", "pw")
        assert session.user_id == "admin-1"
        assert session.is_admin
        assert check_access(session) == "approved"

    def test_unapproved_user_is_pending(self, users):
        assert check_access(sign_in("new@example.com", "pw")) == "pending"

    def test_bad_password(self, users):
        with pytest.raises(AuthError, match="Invalid email or password"):
            sign_in("new@example.com", "wrong")

    def test_missing_credentials(self, users):
        with pytest.raises(AuthError):
            sign_in("", "")

    def test_sign_out_discards_client_state(self, users):
        session = sign_in("admin@example.com", "pw")
        session.storage[OUTLOOK_TOKEN_KEY] = "{}"

        sign_out(session)

        assert session.closed
        assert OUTLOOK_TOKEN_KEY not in session.storage
        assert users.auth.signed_out


class TestApproval:

    def test_admin_approves_user(self, users):
        admin = sign_in("admin@example.com", "pw")
        set_user_approval(admin, "user-2", is_approved=True)
        assert users.row("profiles", "user-2")["is_approved"] is True

    def test_non_admin_rejected(self, users):
        member = SessionContext(user_id="user-3", is_approved=True)
        with pytest.raises(PermissionError):
            set_user_approval(member, "user-2", is_approved=True)
        assert users.row("profiles", "user-2")["is_approved"] is False

    def test_no_flags_no_write(self, users):
        admin = sign_in("admin@example.com", "pw")
        calls = len(users.calls)
        set_user_approval(admin, "user-2")
        assert len(users.calls) == calls
