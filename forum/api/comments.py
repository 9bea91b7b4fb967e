"""API endpoints for question comments."""

from fastapi import APIRouter, Depends, Query

from forum.core.auth_middleware import AuthContext, require_auth
from forum.core.errors import ForumError, NotFound, StoreError, ValidationFailed
from forum.core.logging import get_logger
from forum.core.schemas_engagement import (
    CommentResponse,
    CreateCommentRequest,
    ListCommentsResponse,
)
from forum.core.schemas_profiles import ProfileRecord
from forum.core.schemas_questions import (
    ANONYMOUS_USER_ID,
    CommentRecord,
    parse_timestamp,
)
from forum.db.comments import insert_comment, list_comments as db_list_comments
from forum.db.questions import get_question
from forum.db.users import get_profile, get_profiles

logger = get_logger(__name__)

router = APIRouter()

ANONYMOUS_AUTHOR_NAME = "Anonymous"
DEFAULT_AUTHOR_NAME = "Forum member"


def to_comment_record(row: dict, profile: dict | None) -> CommentRecord:
    """Map a comments row plus its author's profile to the wire record.

    Anonymity comes from the row, never from the author's current preference.
    """
    is_anonymous = bool(row.get("is_anonymous"))
    author_name = ANONYMOUS_AUTHOR_NAME
    avatar_url = None
    user_id = ANONYMOUS_USER_ID
    if not is_anonymous:
        user_id = str(row["user_id"]) if row.get("user_id") else ANONYMOUS_USER_ID
        if profile:
            record = ProfileRecord.from_row(profile)
            author_name = record.display_name or DEFAULT_AUTHOR_NAME
            avatar_url = record.avatar_url
        else:
            author_name = DEFAULT_AUTHOR_NAME

    return CommentRecord(
        id=str(row["id"]),
        question_id=str(row["question_id"]),
        user_id=user_id,
        text=str(row.get("text") or ""),
        timestamp=parse_timestamp(row.get("created_at")),
        upvotes=row.get("upvotes") or 0,
        author_name=author_name,
        author_avatar_url=avatar_url,
        is_anonymous=is_anonymous,
    )


@router.get("/comments", response_model=ListCommentsResponse)
def list_comments(
    question_id: str = Query(..., alias="questionId", min_length=1),
) -> ListCommentsResponse:
    """List a question's comments, oldest first, with author display fields."""
    try:
        rows = db_list_comments(question_id)
        profiles = get_profiles([str(r["user_id"]) for r in rows if r.get("user_id")])
        return ListCommentsResponse(
            comments=[to_comment_record(r, profiles.get(str(r.get("user_id")))) for r in rows]
        )
    except Exception as e:
        error_msg = f"Failed to list comments: {e}"
        logger.error(error_msg, extra={"question_id": question_id})
        raise StoreError(error_msg) from e


@router.post("/comments", response_model=CommentResponse)
def add_comment(
    request: CreateCommentRequest,
    auth: AuthContext = Depends(require_auth),
) -> CommentResponse:
    """
    Add a comment as the signed-in user.

    The author's current "post anonymously" preference is copied onto the comment.

    Raises:
        ValidationFailed: If the question id or text is empty
        NotFound: If the question does not exist
        StoreError: If a store call fails
    """
    question_id = request.question_id.strip()
    text = request.text.strip()
    if not question_id:
        raise ValidationFailed("Missing questionId")
    if not text:
        raise ValidationFailed("Missing comment text")

    try:
        if get_question(question_id) is None:
            raise NotFound(f"Question {question_id} not found")

        profile = get_profile(auth.user_id)
        is_anonymous = bool(profile and profile.get("post_anonymously"))

        row = insert_comment(question_id, auth.user_id, text, is_anonymous)
        return CommentResponse(comment=to_comment_record(row, profile))
    except ForumError:
        raise
    except Exception as e:
        error_msg = f"Failed to add comment: {e}"
        logger.error(error_msg, extra={"question_id": question_id, "user_id": auth.user_id})
        raise StoreError(error_msg) from e
