"""Database operations for the bookmarks table."""

from typing import Any

from forum.db.supabase_client import get_supabase


def find_bookmark(user_id: str, question_id: str) -> dict[str, Any] | None:
    supabase = get_supabase()
    result = (
        supabase.table("bookmarks")
        .select("id")
        .eq("user_id", user_id)
        .eq("question_id", question_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def insert_bookmark(user_id: str, question_id: str) -> None:
    supabase = get_supabase()
    supabase.table("bookmarks").insert({"user_id": user_id, "question_id": question_id}).execute()


def delete_bookmark(bookmark_id: str) -> None:
    supabase = get_supabase()
    supabase.table("bookmarks").delete().eq("id", bookmark_id).execute()


def list_bookmarks(user_id: str, limit: int = 50) -> list[dict[str, Any]]:
    """List a user's bookmark rows, most recently saved first."""
    supabase = get_supabase()
    result = (
        supabase.table("bookmarks")
        .select("id, question_id, created_at")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return result.data or []
