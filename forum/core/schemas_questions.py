"""Pydantic schemas for questions and discussion posts."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from forum.core.logging import get_logger

logger = get_logger(__name__)

ANONYMOUS_USER_ID = "anonymous"


class CamelModel(BaseModel):
    """Wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionKind(str, Enum):
    AI = "ai"
    DISCUSSION = "discussion"


class QuestionStatus(str, Enum):
    ANSWERED = "answered"
    REJECTED = "rejected"
    ESCALATED = "escalated"


class StudentYear(str, Enum):
    """Audience tag: the class standing a question or preference is aimed at."""

    INCOMING = "Incoming/Prospective"
    FRESHMAN = "Freshman"
    SOPHOMORE = "Sophomore"
    JUNIOR = "Junior"
    SENIOR = "Senior"
    ALL = "All"


def coerce_student_year(value: Any) -> StudentYear | None:
    """Map a stored audience tag to ``StudentYear``; unknown tags become None."""
    if not value:
        return None
    try:
        return StudentYear(value)
    except ValueError:
        logger.warning(f"Ignoring unknown student year tag: {value!r}")
        return None


def parse_timestamp(value: Any) -> datetime:
    """Convert a store timestamp (ISO string or datetime) to an aware datetime."""
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        return datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class CommentRecord(CamelModel):
    id: str
    question_id: str
    user_id: str = ANONYMOUS_USER_ID
    text: str
    timestamp: datetime
    upvotes: int = 0
    author_name: str | None = None
    author_avatar_url: str | None = None
    is_anonymous: bool = False


class QuestionRecord(CamelModel):
    """A question or discussion post as returned to clients."""

    id: str
    user_id: str = ANONYMOUS_USER_ID
    type: QuestionKind
    question_text: str
    ai_answer: str | None = None
    status: QuestionStatus | None = None
    student_year: StudentYear | None = None
    timestamp: datetime
    upvotes: int = 0
    comments: list[CommentRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _discussions_have_no_answer(self) -> "QuestionRecord":
        if self.type == QuestionKind.DISCUSSION and (self.ai_answer or self.status):
            raise ValueError("discussion posts never carry an AI answer or status")
        return self

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "QuestionRecord":
        """Map a ``questions`` row to its wire record."""
        kind = QuestionKind(row.get("type") or QuestionKind.AI.value)
        student_year = row.get("student_year")
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]) if row.get("user_id") else ANONYMOUS_USER_ID,
            type=kind,
            question_text=str(row.get("question_text") or ""),
            ai_answer=row.get("ai_answer") if kind == QuestionKind.AI else None,
            status=row.get("status") if kind == QuestionKind.AI else None,
            student_year=coerce_student_year(student_year),
            timestamp=parse_timestamp(row.get("created_at")),
            upvotes=row.get("upvotes") or 0,
        )


class CreateDiscussionRequest(CamelModel):
    question_text: str = Field(..., description="Discussion topic text")
    student_year: StudentYear | None = None


class ListQuestionsResponse(CamelModel):
    questions: list[QuestionRecord]


class ActivityResponse(CamelModel):
    ai_questions: list[QuestionRecord]
    discussion_posts: list[QuestionRecord]
