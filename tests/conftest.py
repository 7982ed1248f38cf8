import pytest

from src.database import set_supabase_client
from src.session import SessionContext
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def db():
    fake = FakeSupabase()
    set_supabase_client(fake)
    yield fake
    set_supabase_client(None)


@pytest.fixture
def session():
    return SessionContext(user_id="user-1", email="owner@example.com", is_approved=True)
