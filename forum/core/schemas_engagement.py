"""Pydantic schemas for comments, likes and bookmarks."""

from enum import Enum

from forum.core.schemas_questions import CamelModel, CommentRecord, QuestionRecord


class CreateCommentRequest(CamelModel):
    question_id: str
    text: str


class ListCommentsResponse(CamelModel):
    comments: list[CommentRecord]


class CommentResponse(CamelModel):
    comment: CommentRecord


class LikeTargetType(str, Enum):
    QUESTION = "question"
    COMMENT = "comment"


class ToggleLikeRequest(CamelModel):
    target_type: LikeTargetType
    target_id: str


class ToggleLikeResponse(CamelModel):
    liked: bool
    new_count: int


class ToggleBookmarkRequest(CamelModel):
    question_id: str


class ToggleBookmarkResponse(CamelModel):
    bookmarked: bool


class ListBookmarksResponse(CamelModel):
    bookmarks: list[QuestionRecord]
