"""API endpoints for bookmarks."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from forum.api.helpers import clamp_limit
from forum.core.auth_middleware import AuthContext, require_auth
from forum.core.config import Settings, get_settings
from forum.core.engagement import toggle_bookmark
from forum.core.errors import ForumError, StoreError, ValidationFailed
from forum.core.logging import get_logger
from forum.core.schemas_engagement import (
    ListBookmarksResponse,
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
)
from forum.core.schemas_questions import QuestionRecord
from forum.db.bookmarks import list_bookmarks as db_list_bookmarks
from forum.db.questions import get_questions_by_ids

logger = get_logger(__name__)

router = APIRouter()


@router.get("/bookmarks", response_model=ListBookmarksResponse, response_model_exclude_none=True)
def list_bookmarks(
    limit: Optional[str] = Query(None, description="Page size, clamped to 1-200"),
    auth: AuthContext = Depends(require_auth),
    settings: Settings = Depends(get_settings),
) -> ListBookmarksResponse:
    """List the caller's bookmarked questions, most recently saved first."""
    try:
        bookmarks = db_list_bookmarks(auth.user_id, clamp_limit(limit, settings))
        question_ids = [str(b["question_id"]) for b in bookmarks]
        rows = {str(r["id"]): r for r in get_questions_by_ids(question_ids)}
        return ListBookmarksResponse(
            bookmarks=[QuestionRecord.from_row(rows[qid]) for qid in question_ids if qid in rows]
        )
    except Exception as e:
        error_msg = f"Failed to list bookmarks: {e}"
        logger.error(error_msg, extra={"user_id": auth.user_id})
        raise StoreError(error_msg) from e


@router.post("/bookmarks", response_model=ToggleBookmarkResponse)
def toggle_bookmark_endpoint(
    request: ToggleBookmarkRequest,
    auth: AuthContext = Depends(require_auth),
) -> ToggleBookmarkResponse:
    """Save or unsave a question for the caller."""
    question_id = request.question_id.strip()
    if not question_id:
        raise ValidationFailed("Missing questionId")

    try:
        return toggle_bookmark(user_id=auth.user_id, question_id=question_id)
    except ForumError:
        raise
    except Exception as e:
        error_msg = f"Failed to toggle bookmark: {e}"
        logger.error(error_msg, extra={"question_id": question_id, "user_id": auth.user_id})
        raise StoreError(error_msg) from e
