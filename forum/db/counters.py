"""Denormalized upvote counters on questions and comments."""

from forum.db.supabase_client import get_supabase

COUNTER_TABLES = ("questions", "comments")


def _check_table(table: str) -> None:
    if table not in COUNTER_TABLES:
        raise ValueError(f"No upvote counter on table {table}")


def get_upvotes(table: str, target_id: str) -> int | None:
    """Read a target's counter. Returns None if the target does not exist."""
    _check_table(table)
    supabase = get_supabase()
    result = (
        supabase.table(table)
        .select("id, upvotes")
        .eq("id", target_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return result.data[0].get("upvotes") or 0


def set_upvotes(table: str, target_id: str, value: int) -> int:
    """Overwrite a target's counter and return the stored value."""
    _check_table(table)
    supabase = get_supabase()
    result = (
        supabase.table(table)
        .update({"upvotes": value})
        .eq("id", target_id)
        .execute()
    )
    if not result.data:
        raise ValueError(f"No data returned from {table} counter update")
    return result.data[0].get("upvotes") or 0


def adjust_upvotes_atomic(table: str, target_id: str, delta: int) -> int | None:
    """
    Add ``delta`` to a counter in a single conditional update, floored at zero.

    Runs the ``adjust_upvotes`` database function (see migrations/). Returns the
    new value, or None if the target does not exist.
    """
    _check_table(table)
    supabase = get_supabase()
    result = supabase.rpc(
        "adjust_upvotes",
        {"target_table": table, "target_id": target_id, "delta": delta},
    ).execute()
    return result.data
