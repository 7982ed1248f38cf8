"""User profile reads and admin approval flags.

Profiles go through the service client: approval flags must be readable
before a user is approved, and only admins may write them (checked in
src.auth).
"""

from src.database.client import get_service_client, with_retry, first_row


@with_retry()
def get_profile(user_id: str) -> dict | None:
    """Profile row (email, full_name, is_approved, is_admin)."""
    result = get_service_client().from_("profiles").select(
        "id, email, full_name, is_approved, is_admin"
    ).eq("id", user_id).limit(1).execute()
    return first_row(result)


@with_retry()
def get_all_profiles() -> list:
    """All profiles, newest first, for the admin approval screen."""
    result = get_service_client().from_("profiles").select("*").order(
        "created_at", desc=True
    ).execute()
    return result.data or []


def update_profile_flags(user_id: str, updates: dict):
    """Write is_approved / is_admin flags."""
    get_service_client().from_("profiles").update(updates).eq("id", user_id).execute()
