"""Like and bookmark toggles.

A toggle flips membership of a (user, target) pair. Likes also move the
target's upvote counter by one, floored at zero. Relation write and counter
write are separate store calls with no transaction around them.
"""

import logging

from forum.core.errors import NotFound
from forum.core.logging import get_logger, log_with_context
from forum.core.schemas_engagement import (
    LikeTargetType,
    ToggleBookmarkResponse,
    ToggleLikeResponse,
)
from forum.db.bookmarks import delete_bookmark, find_bookmark, insert_bookmark
from forum.db.counters import adjust_upvotes_atomic, get_upvotes, set_upvotes
from forum.db.likes import LIKE_TABLES, delete_like, find_like, insert_like
from forum.db.questions import get_question

logger = get_logger(__name__)


def toggle_like(
    *,
    user_id: str,
    target_type: LikeTargetType,
    target_id: str,
    counter_mode: str = "atomic",
) -> ToggleLikeResponse:
    """
    Like or unlike a question or comment.

    ``counter_mode`` selects how the counter moves: ``atomic`` issues a single
    conditional update in the store; ``read_modify_write`` writes back the value
    read at the start of the toggle, so concurrent togglers of the same target
    can lose updates.

    Raises:
        NotFound: If the target does not exist
    """
    kind = target_type.value
    _, _, counter_table = LIKE_TABLES[kind]

    current = get_upvotes(counter_table, target_id)
    if current is None:
        raise NotFound(f"{kind.capitalize()} {target_id} not found")

    existing = find_like(kind, target_id, user_id)
    if existing:
        delete_like(kind, existing["id"])
        delta = -1
    else:
        insert_like(kind, target_id, user_id)
        delta = 1

    if counter_mode == "atomic":
        new_count = adjust_upvotes_atomic(counter_table, target_id, delta)
        if new_count is None:
            raise NotFound(f"{kind.capitalize()} {target_id} not found")
    else:
        new_count = set_upvotes(counter_table, target_id, max(0, current + delta))

    log_with_context(
        logger,
        logging.INFO,
        f"{'Liked' if delta > 0 else 'Unliked'} {kind}",
        target_id=target_id,
        user_id=user_id,
        new_count=new_count,
    )
    return ToggleLikeResponse(liked=delta > 0, new_count=new_count)


def toggle_bookmark(*, user_id: str, question_id: str) -> ToggleBookmarkResponse:
    """
    Save or unsave a question. Independent of like state.

    Raises:
        NotFound: If the question does not exist
    """
    if get_question(question_id) is None:
        raise NotFound(f"Question {question_id} not found")

    existing = find_bookmark(user_id, question_id)
    if existing:
        delete_bookmark(existing["id"])
        return ToggleBookmarkResponse(bookmarked=False)

    insert_bookmark(user_id, question_id)
    return ToggleBookmarkResponse(bookmarked=True)
