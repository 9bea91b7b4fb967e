"""Database operations for question_likes and comment_likes."""

from typing import Any

from forum.db.supabase_client import get_supabase

# target type -> (relation table, foreign key column, counter table)
LIKE_TABLES = {
    "question": ("question_likes", "question_id", "questions"),
    "comment": ("comment_likes", "comment_id", "comments"),
}


def find_like(target_type: str, target_id: str, user_id: str) -> dict[str, Any] | None:
    likes_table, fk_column, _ = LIKE_TABLES[target_type]
    supabase = get_supabase()
    result = (
        supabase.table(likes_table)
        .select("id")
        .eq(fk_column, target_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def insert_like(target_type: str, target_id: str, user_id: str) -> None:
    likes_table, fk_column, _ = LIKE_TABLES[target_type]
    supabase = get_supabase()
    supabase.table(likes_table).insert({fk_column: target_id, "user_id": user_id}).execute()


def delete_like(target_type: str, like_id: str) -> None:
    likes_table, _, _ = LIKE_TABLES[target_type]
    supabase = get_supabase()
    supabase.table(likes_table).delete().eq("id", like_id).execute()
