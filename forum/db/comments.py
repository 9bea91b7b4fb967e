"""Database operations for the comments table."""

from typing import Any

from forum.db.supabase_client import get_supabase

COMMENT_COLUMNS = "id, question_id, user_id, text, upvotes, is_anonymous, created_at"


def list_comments(question_id: str) -> list[dict[str, Any]]:
    """List comments on a question, oldest first."""
    supabase = get_supabase()
    result = (
        supabase.table("comments")
        .select(COMMENT_COLUMNS)
        .eq("question_id", question_id)
        .order("created_at", desc=False)
        .execute()
    )
    return result.data or []


def insert_comment(
    question_id: str, user_id: str, text: str, is_anonymous: bool
) -> dict[str, Any]:
    """
    Insert a comment.

    ``is_anonymous`` is captured once here and never updated afterwards.
    """
    supabase = get_supabase()
    result = (
        supabase.table("comments")
        .insert(
            {
                "question_id": question_id,
                "user_id": user_id,
                "text": text,
                "is_anonymous": is_anonymous,
                "upvotes": 0,
            }
        )
        .execute()
    )
    if not result.data:
        raise ValueError("No data returned from comment insert")
    return result.data[0]
