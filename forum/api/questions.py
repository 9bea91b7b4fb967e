"""API endpoints for listing questions and creating discussion posts."""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query

from forum.api.helpers import clamp_limit
from forum.chains.moderate_discussion import moderate_topic
from forum.core.auth_middleware import AuthContext, get_current_user
from forum.core.config import Settings, get_settings
from forum.core.errors import ForumError, ModerationRejected, StoreError, ValidationFailed
from forum.core.llm import CompletionClient, get_completion_client
from forum.core.logging import get_logger
from forum.core.schemas_questions import (
    CamelModel,
    CreateDiscussionRequest,
    ListQuestionsResponse,
    QuestionKind,
    QuestionRecord,
)
from forum.db.questions import insert_question, list_questions as db_list_questions

logger = get_logger(__name__)

router = APIRouter()


class QuestionResponse(CamelModel):
    question: QuestionRecord


@router.get("/questions", response_model=ListQuestionsResponse, response_model_exclude_none=True)
def list_questions(
    type: QuestionKind = Query(QuestionKind.AI, description="ai or discussion"),
    limit: Optional[str] = Query(None, description="Page size, clamped to 1-200"),
    settings: Settings = Depends(get_settings),
) -> ListQuestionsResponse:
    """
    List the newest questions of one kind.

    Raises:
        StoreError: If the query fails
    """
    page_size = clamp_limit(limit, settings)
    try:
        rows = db_list_questions(type.value, page_size)
        return ListQuestionsResponse(questions=[QuestionRecord.from_row(r) for r in rows])
    except Exception as e:
        error_msg = f"Failed to list questions: {e}"
        logger.error(error_msg, extra={"kind": type.value})
        raise StoreError(error_msg) from e


@router.post("/questions", response_model=QuestionResponse, response_model_exclude_none=True)
async def create_discussion(
    request: CreateDiscussionRequest,
    auth: Optional[AuthContext] = Depends(get_current_user),
    client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> QuestionResponse:
    """
    Post a discussion topic after it passes moderation.

    Anonymous callers may post; signed-in callers are recorded as the author.

    Raises:
        ValidationFailed: If the topic is empty
        ModerationRejected: If moderation refuses the topic
        StoreError: If the insert fails
    """
    topic = request.question_text.strip()
    if not topic:
        raise ValidationFailed("Missing topic text")

    verdict = await asyncio.to_thread(
        moderate_topic, topic=topic, client=client, settings=settings
    )
    if not verdict.approved:
        raise ModerationRejected(verdict.reason or "Topic rejected")

    user_id = auth.user_id if auth else None
    try:
        row = await asyncio.to_thread(
            insert_question,
            kind=QuestionKind.DISCUSSION.value,
            question_text=topic,
            user_id=user_id,
            student_year=request.student_year.value if request.student_year else None,
        )
        return QuestionResponse(question=QuestionRecord.from_row(row))
    except ForumError:
        raise
    except Exception as e:
        error_msg = f"Failed to create discussion: {e}"
        logger.error(error_msg, extra={"user_id": user_id})
        raise StoreError(error_msg) from e
