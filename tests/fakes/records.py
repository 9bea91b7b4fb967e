"""Builders for wire records used by the client tests."""

from datetime import datetime, timedelta, timezone

from forum.core.schemas_questions import (
    CommentRecord,
    QuestionKind,
    QuestionRecord,
    QuestionStatus,
    StudentYear,
)

BASE = datetime(2025, 3, 1, tzinfo=timezone.utc)


def make_question(
    qid,
    text="Question",
    kind=QuestionKind.AI,
    minutes=0,
    upvotes=0,
    year=StudentYear.ALL,
    answer="Answer",
    status=QuestionStatus.ANSWERED,
):
    is_ai = kind == QuestionKind.AI
    return QuestionRecord(
        id=qid,
        type=kind,
        question_text=text,
        ai_answer=answer if is_ai else None,
        status=status if is_ai else None,
        student_year=year,
        timestamp=BASE + timedelta(minutes=minutes),
        upvotes=upvotes,
    )


def make_comment(cid, question_id, text="Comment", minutes=0, upvotes=0):
    return CommentRecord(
        id=cid,
        question_id=question_id,
        user_id="user_1",
        text=text,
        timestamp=BASE + timedelta(minutes=minutes),
        upvotes=upvotes,
    )
