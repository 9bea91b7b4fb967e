"""Pydantic schemas for the ask pipeline and the model outputs it parses."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from forum.core.schemas_questions import CamelModel, QuestionRecord, StudentYear


class AskRequest(CamelModel):
    question: str
    student_year: StudentYear | None = None


class DuplicateType(str, Enum):
    EXACT = "exact"
    SEMANTIC = "semantic"


class AskStatus(str, Enum):
    ANSWERED = "answered"
    REJECTED = "rejected"


class AskResult(CamelModel):
    """Outcome of one /ask submission."""

    status: AskStatus
    answer: str | None = None
    reason: str | None = None
    record_id: str | None = None
    duplicate: bool = False
    duplicate_type: DuplicateType | None = None
    question: QuestionRecord | None = None


# ---------------------------------------------------------------------------
# Model outputs
# ---------------------------------------------------------------------------


class AnswerOutput(BaseModel):
    status: AskStatus
    answer: str | None = None
    reason: str | None = None


class DuplicateOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_duplicate: StrictBool = Field(default=False, alias="isDuplicate")
    matched_id: str | None = Field(default=None, alias="matchedId")


class ModerationOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_approved: StrictBool = Field(..., alias="isApproved")
    reason: str | None = None


class DuplicateCandidate(BaseModel):
    id: str
    question_text: str
