"""Database operations for user profiles."""

from typing import Any

from forum.db.supabase_client import get_supabase

PROFILE_COLUMNS = (
    "id, user_id, first_name, last_name, avatar_url, student_year, post_anonymously, audience_tags"
)


def get_profile(user_id: str) -> dict[str, Any] | None:
    supabase = get_supabase()
    result = (
        supabase.table("users")
        .select(PROFILE_COLUMNS)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def get_profiles(user_ids: list[str]) -> dict[str, dict[str, Any]]:
    """Fetch several profiles keyed by user id."""
    if not user_ids:
        return {}
    supabase = get_supabase()
    result = (
        supabase.table("users")
        .select(PROFILE_COLUMNS)
        .in_("user_id", list(set(user_ids)))
        .execute()
    )
    return {str(row["user_id"]): row for row in result.data or []}


def upsert_profile(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Insert or update a profile keyed by ``user_id``.

    Only the keys present in ``payload`` are written, so callers that leave out
    ``post_anonymously`` keep the stored preference.
    """
    supabase = get_supabase()
    result = supabase.table("users").upsert(payload, on_conflict="user_id").execute()
    if not result.data:
        raise ValueError("No data returned from profile upsert")
    return result.data[0]
