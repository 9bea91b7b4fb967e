"""Duplicate detection and answer generation for submitted AI questions.

A submission goes through, in order:

1. optional spelling correction (fail open)
2. exact match against the most recent answered AI questions after normalization
3. semantic match by the language model over the same candidates (fail open)
4. fresh answer generation (fail closed)

Only step 4 with an ``answered`` result writes to the store, so a submission
persists at most one new question row.
"""

import re

from forum.chains.answer_question import generate_answer
from forum.chains.check_duplicate import find_semantic_duplicate
from forum.chains.correct_spelling import correct_spelling
from forum.core.config import Settings
from forum.core.errors import ValidationFailed
from forum.core.llm import CompletionClient
from forum.core.logging import get_logger
from forum.core.schemas_ask import (
    AskResult,
    AskStatus,
    DuplicateCandidate,
    DuplicateType,
)
from forum.core.schemas_questions import QuestionRecord
from forum.db.questions import insert_question, list_duplicate_candidates

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = re.compile(r"[\s?!.]+$")
_QUOTES = str.maketrans(
    {
        "“": '"',
        "”": '"',
        "„": '"',
        "″": '"',
        "‘": "'",
        "’": "'",
        "‚": "'",
        "′": "'",
    }
)


def normalize_question(text: str) -> str:
    """
    Canonical form used for exact duplicate matching.

    Case-folds, collapses whitespace, maps typographic quotes to ASCII and drops
    trailing question marks, periods and exclamation marks. Idempotent.
    """
    normalized = _WHITESPACE.sub(" ", text.casefold()).strip()
    normalized = normalized.translate(_QUOTES)
    return _TRAILING_PUNCTUATION.sub("", normalized)


def _is_answered(row: dict) -> bool:
    return row.get("status") == "answered" and bool(row.get("ai_answer"))


def _duplicate_result(row: dict, duplicate_type: DuplicateType) -> AskResult:
    record = QuestionRecord.from_row(row)
    return AskResult(
        status=AskStatus.ANSWERED,
        answer=row["ai_answer"],
        record_id=record.id,
        duplicate=True,
        duplicate_type=duplicate_type,
        question=record,
    )


def run_ask_pipeline(
    *,
    question: str,
    student_year: str | None,
    user_id: str | None,
    client: CompletionClient,
    settings: Settings,
) -> AskResult:
    """
    Answer a question, reusing a stored answer when it duplicates an earlier one.

    Args:
        question: Raw question text from the caller
        student_year: Optional audience tag
        user_id: Verified caller id, or None for anonymous submissions
        client: Completion client for all model calls
        settings: Application settings

    Returns:
        AskResult describing the answer, rejection or duplicate hit

    Raises:
        ValidationFailed: If the trimmed question is shorter than MIN_QUESTION_CHARS
        UpstreamModelError: If answer generation yields no usable result
        Exception: Store failures propagate unchanged
    """
    cleaned = (question or "").strip()
    if len(cleaned) < settings.MIN_QUESTION_CHARS:
        raise ValidationFailed("Invalid question")

    if settings.SPELL_CORRECTION_ENABLED:
        cleaned = correct_spelling(text=cleaned, client=client, settings=settings)

    normalized = normalize_question(cleaned)
    candidates = list_duplicate_candidates(settings.DUPLICATE_CANDIDATES_LIMIT)
    answered = [row for row in candidates if _is_answered(row)]

    # 1) Exact duplicate
    for row in answered:
        if normalize_question(str(row.get("question_text") or "")) == normalized:
            logger.info(
                "Exact duplicate found",
                extra={"question_id": str(row["id"]), "duplicate_type": "exact"},
            )
            return _duplicate_result(row, DuplicateType.EXACT)

    # 2) Semantic duplicate
    if settings.SEMANTIC_DUPLICATE_CHECK_ENABLED and answered:
        by_id = {str(row["id"]): row for row in answered}
        verdict = find_semantic_duplicate(
            question_text=cleaned,
            candidates=[
                DuplicateCandidate(id=qid, question_text=str(row.get("question_text") or ""))
                for qid, row in by_id.items()
            ],
            client=client,
            settings=settings,
        )
        matched = by_id.get(verdict.matched_id or "") if verdict.is_duplicate else None
        if matched:
            logger.info(
                "Semantic duplicate found",
                extra={"question_id": str(matched["id"]), "duplicate_type": "semantic"},
            )
            return _duplicate_result(matched, DuplicateType.SEMANTIC)
        if verdict.is_duplicate:
            logger.warning(
                "Model matched an id outside the candidate list",
                extra={"matched_id": verdict.matched_id},
            )

    # 3) Fresh answer
    output = generate_answer(
        question_text=cleaned,
        student_year=student_year,
        client=client,
        settings=settings,
    )

    if output.status == AskStatus.REJECTED:
        logger.info("Question rejected as out of scope", extra={"user_id": user_id})
        return AskResult(status=AskStatus.REJECTED, reason=output.reason, duplicate=False)

    row = insert_question(
        kind="ai",
        question_text=cleaned,
        user_id=user_id,
        student_year=student_year,
        ai_answer=output.answer,
        status="answered",
    )
    record = QuestionRecord.from_row(row)
    return AskResult(
        status=AskStatus.ANSWERED,
        answer=output.answer,
        record_id=record.id,
        duplicate=False,
        question=record,
    )
