"""API endpoint for the caller's own posting activity."""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query

from forum.api.helpers import clamp_limit
from forum.core.auth_middleware import AuthContext, require_auth
from forum.core.config import Settings, get_settings
from forum.core.errors import StoreError
from forum.core.logging import get_logger
from forum.core.schemas_questions import ActivityResponse, QuestionKind, QuestionRecord
from forum.db.questions import list_user_questions

logger = get_logger(__name__)

router = APIRouter()


@router.get("/my/activity", response_model=ActivityResponse, response_model_exclude_none=True)
async def my_activity(
    limit: Optional[str] = Query(None, description="Page size per list, clamped to 1-200"),
    auth: AuthContext = Depends(require_auth),
    settings: Settings = Depends(get_settings),
) -> ActivityResponse:
    """List the caller's AI questions and discussion posts, newest first."""
    page_size = clamp_limit(limit, settings)
    try:
        # The two lists are independent; fetch them concurrently
        ai_rows, discussion_rows = await asyncio.gather(
            asyncio.to_thread(list_user_questions, auth.user_id, QuestionKind.AI.value, page_size),
            asyncio.to_thread(
                list_user_questions, auth.user_id, QuestionKind.DISCUSSION.value, page_size
            ),
        )
    except Exception as e:
        error_msg = f"Failed to load activity: {e}"
        logger.error(error_msg, extra={"user_id": auth.user_id})
        raise StoreError(error_msg) from e

    return ActivityResponse(
        ai_questions=[QuestionRecord.from_row(r) for r in ai_rows],
        discussion_posts=[QuestionRecord.from_row(r) for r in discussion_rows],
    )
