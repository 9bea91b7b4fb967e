"""Database operations for the questions table (AI questions and discussion posts)."""

from typing import Any

from forum.core.logging import get_logger
from forum.db.supabase_client import get_supabase

logger = get_logger(__name__)

QUESTION_COLUMNS = (
    "id, user_id, type, question_text, ai_answer, status, student_year, upvotes, created_at"
)


def list_questions(kind: str, limit: int = 50) -> list[dict[str, Any]]:
    """List questions of one kind, newest first."""
    supabase = get_supabase()
    result = (
        supabase.table("questions")
        .select(QUESTION_COLUMNS)
        .eq("type", kind)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return result.data or []


def list_duplicate_candidates(limit: int) -> list[dict[str, Any]]:
    """
    Fetch the most recent answered AI questions for duplicate detection.

    Ordered by creation time, newest first. There is no secondary ordering, so
    rows sharing a timestamp come back in whatever order the store returns them.
    """
    supabase = get_supabase()
    result = (
        supabase.table("questions")
        .select(QUESTION_COLUMNS)
        .eq("type", "ai")
        .eq("status", "answered")
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return result.data or []


def get_question(question_id: str) -> dict[str, Any] | None:
    supabase = get_supabase()
    result = (
        supabase.table("questions")
        .select(QUESTION_COLUMNS)
        .eq("id", question_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def get_questions_by_ids(question_ids: list[str]) -> list[dict[str, Any]]:
    """Fetch several questions at once; order is not preserved."""
    if not question_ids:
        return []
    supabase = get_supabase()
    result = (
        supabase.table("questions")
        .select(QUESTION_COLUMNS)
        .in_("id", question_ids)
        .execute()
    )
    return result.data or []


def insert_question(
    kind: str,
    question_text: str,
    user_id: str | None = None,
    student_year: str | None = None,
    ai_answer: str | None = None,
    status: str | None = None,
) -> dict[str, Any]:
    """
    Insert a new question row.

    Discussion posts never carry an AI answer or status.

    Returns:
        The inserted row

    Raises:
        ValueError: If the store returned no row
    """
    if kind == "discussion" and (ai_answer or status):
        raise ValueError("Discussion posts cannot carry an AI answer or status")

    supabase = get_supabase()
    row: dict[str, Any] = {
        "type": kind,
        "question_text": question_text,
        "user_id": user_id,
        "student_year": student_year or "All",
        "upvotes": 0,
    }
    if kind == "ai":
        row["status"] = status
        row["ai_answer"] = ai_answer

    result = supabase.table("questions").insert(row).execute()
    if not result.data:
        raise ValueError("No data returned from question insert")

    logger.info(
        f"Inserted {kind} question",
        extra={"question_id": str(result.data[0].get("id")), "user_id": user_id},
    )
    return result.data[0]


def list_user_questions(user_id: str, kind: str, limit: int = 50) -> list[dict[str, Any]]:
    """List one user's questions of a kind, newest first."""
    supabase = get_supabase()
    result = (
        supabase.table("questions")
        .select(QUESTION_COLUMNS)
        .eq("user_id", user_id)
        .eq("type", kind)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return result.data or []
