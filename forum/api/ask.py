"""API endpoint for submitting a question to the AI assistant."""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends

from forum.core.ask_pipeline import run_ask_pipeline
from forum.core.auth_middleware import AuthContext, get_current_user
from forum.core.config import Settings, get_settings
from forum.core.errors import ForumError, StoreError
from forum.core.llm import CompletionClient, get_completion_client
from forum.core.logging import get_logger
from forum.core.schemas_ask import AskRequest, AskResult

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ask", response_model=AskResult, response_model_exclude_none=True)
async def ask(
    request: AskRequest,
    auth: Optional[AuthContext] = Depends(get_current_user),
    client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> AskResult:
    """
    Answer a question, or return the stored answer of an earlier duplicate.

    Anonymous submissions are allowed; a verified caller is recorded as author.

    Raises:
        ValidationFailed: If the question is too short
        UpstreamModelError: If answer generation produced nothing usable
        StoreError: If a store query or insert fails
    """
    user_id = auth.user_id if auth else None
    try:
        # Model and store calls block; keep them off the event loop
        return await asyncio.to_thread(
            run_ask_pipeline,
            question=request.question,
            student_year=request.student_year.value if request.student_year else None,
            user_id=user_id,
            client=client,
            settings=settings,
        )
    except ForumError:
        raise
    except Exception as e:
        error_msg = f"Failed to answer question: {e}"
        logger.error(error_msg, extra={"user_id": user_id})
        raise StoreError(error_msg) from e
