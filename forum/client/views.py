"""Local filtering, search and sorting over cached questions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from forum.client.store import ForumStore
from forum.core.schemas_questions import QuestionKind, QuestionRecord, QuestionStatus, StudentYear

YEAR_SECTION_LIMIT = 15


class SortMode(str, Enum):
    RECENCY = "recency"
    LIKES = "likes"


class FilterMode(str, Enum):
    ALL = "all"
    VERIFIED = "verified"


@dataclass
class ForumView:
    kind: QuestionKind = QuestionKind.DISCUSSION
    search: str = ""
    filter_mode: FilterMode = FilterMode.ALL
    sort_mode: SortMode = SortMode.RECENCY
    student_year: StudentYear = StudentYear.ALL


@dataclass
class ForumSections:
    pinned: list[QuestionRecord] = field(default_factory=list)
    featured: QuestionRecord | None = None
    year_specific: list[QuestionRecord] = field(default_factory=list)
    remaining: list[QuestionRecord] = field(default_factory=list)


def matches_search(question: QuestionRecord, query: str) -> bool:
    """Case-insensitive substring match over question text and answer."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystack = f"{question.question_text} {question.ai_answer or ''}".lower()
    return needle in haystack


def matches_filter(question: QuestionRecord, view: ForumView) -> bool:
    # "verified" only applies to the AI view
    if view.filter_mode == FilterMode.ALL or view.kind != QuestionKind.AI:
        return True
    return question.type == QuestionKind.AI and question.status == QuestionStatus.ANSWERED


def sort_questions(items: list[QuestionRecord], mode: SortMode) -> list[QuestionRecord]:
    if mode == SortMode.LIKES:
        return sorted(items, key=lambda q: (q.upvotes, q.timestamp), reverse=True)
    return sorted(items, key=lambda q: q.timestamp, reverse=True)


def build_sections(
    store: ForumStore, view: ForumView, featured_id: str | None = None
) -> ForumSections:
    """
    Split cached questions of ``view.kind`` into the sections a forum page shows.

    Pinned questions are listed on their own and left out of the other lists.
    With an audience tag selected, up to 15 of the newest matching questions get
    their own section and are left out of ``remaining``. The featured question
    never appears twice.
    """
    questions = [q for q in store.all_questions() if q.type == view.kind]
    by_id = {q.id: q for q in questions}
    pinned = [by_id[qid] for qid in store.pinned_ids if qid in by_id]
    pinned_ids = {q.id for q in pinned}

    base = sort_questions([q for q in questions if q.id not in pinned_ids], SortMode.RECENCY)
    year_specific: list[QuestionRecord] = []
    if view.student_year != StudentYear.ALL:
        year_specific = [q for q in base if q.student_year == view.student_year][
            :YEAR_SECTION_LIMIT
        ]

    def refine(items: list[QuestionRecord]) -> list[QuestionRecord]:
        kept = [q for q in items if matches_search(q, view.search) and matches_filter(q, view)]
        kept = sort_questions(kept, view.sort_mode)
        return [q for q in kept if q.id != featured_id]

    year_section = refine(year_specific)
    year_ids = {q.id for q in year_section}
    remaining = [q for q in refine(base) if q.id not in year_ids]

    return ForumSections(
        pinned=pinned,
        featured=by_id.get(featured_id) if featured_id else None,
        year_specific=year_section,
        remaining=remaining,
    )
