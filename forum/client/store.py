"""Client-side entity cache.

Holds the questions, comments and per-user relations a client has seen, keyed
by id. Two merge paths exist:

- ``merge_fetched``: records from list endpoints. Server fields are updated;
  comments already loaded for a question are kept when the list record carries
  none (list endpoints never embed comments).
- ``merge_mutation``: a record returned by a create call. It replaces the
  cached entity and moves to the front of the display order.

Like and bookmark state changes only from confirmed server responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from forum.core.schemas_ask import AskResult
from forum.core.schemas_engagement import (
    LikeTargetType,
    ToggleBookmarkResponse,
    ToggleLikeResponse,
)
from forum.core.schemas_questions import CommentRecord, QuestionRecord

MAX_PINNED = 2


@dataclass
class ForumStore:
    questions: dict[str, QuestionRecord] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)
    comments: dict[str, CommentRecord] = field(default_factory=dict)
    comment_ids: dict[str, list[str]] = field(default_factory=dict)
    liked_question_ids: set[str] = field(default_factory=set)
    liked_comment_ids: set[str] = field(default_factory=set)
    bookmarked_ids: set[str] = field(default_factory=set)
    pinned_ids: list[str] = field(default_factory=list)

    # Questions

    def _put(self, record: QuestionRecord) -> None:
        if record.comments:
            self.set_comments(record.id, record.comments)
        self.questions[record.id] = record.model_copy(update={"comments": []})

    def merge_fetched(self, records: list[QuestionRecord]) -> None:
        for record in records:
            if record.id not in self.questions:
                self.order.append(record.id)
            self._put(record)

    def merge_mutation(self, record: QuestionRecord) -> None:
        if record.id in self.order:
            self.order.remove(record.id)
        self.order.insert(0, record.id)
        self._put(record)

    def merge_ask_result(self, result: AskResult) -> None:
        """Cache the question an /ask call answered with, new or duplicate."""
        if result.question is None:
            return
        if result.duplicate:
            self.merge_fetched([result.question])
        else:
            self.merge_mutation(result.question)

    def get(self, question_id: str) -> QuestionRecord | None:
        """Return a question with its loaded comments attached."""
        record = self.questions.get(question_id)
        if record is None:
            return None
        return record.model_copy(update={"comments": self.comments_for(question_id)})

    def all_questions(self) -> list[QuestionRecord]:
        return [self.get(qid) for qid in self.order if qid in self.questions]

    # Comments

    def set_comments(self, question_id: str, comments: list[CommentRecord]) -> None:
        """Replace a question's comment list with freshly fetched comments."""
        for comment in comments:
            self.comments[comment.id] = comment
        self.comment_ids[question_id] = [c.id for c in comments]

    def add_comment(self, comment: CommentRecord) -> None:
        self.comments[comment.id] = comment
        ids = self.comment_ids.setdefault(comment.question_id, [])
        if comment.id not in ids:
            ids.append(comment.id)

    def comments_for(self, question_id: str) -> list[CommentRecord]:
        return [self.comments[cid] for cid in self.comment_ids.get(question_id, [])]

    # Likes, bookmarks, pins

    def apply_like(
        self, target_type: LikeTargetType, target_id: str, result: ToggleLikeResponse
    ) -> None:
        if target_type == LikeTargetType.QUESTION:
            liked_ids = self.liked_question_ids
            record = self.questions.get(target_id)
            if record is not None:
                self.questions[target_id] = record.model_copy(update={"upvotes": result.new_count})
        else:
            liked_ids = self.liked_comment_ids
            comment = self.comments.get(target_id)
            if comment is not None:
                self.comments[target_id] = comment.model_copy(
                    update={"upvotes": result.new_count}
                )

        if result.liked:
            liked_ids.add(target_id)
        else:
            liked_ids.discard(target_id)

    def apply_bookmark(self, question_id: str, result: ToggleBookmarkResponse) -> None:
        if result.bookmarked:
            self.bookmarked_ids.add(question_id)
        else:
            self.bookmarked_ids.discard(question_id)

    def replace_bookmarks(self, records: list[QuestionRecord]) -> None:
        self.merge_fetched(records)
        self.bookmarked_ids = {r.id for r in records}

    def toggle_pin(self, question_id: str) -> bool:
        """Pin or unpin a question. Returns False when the pin limit is reached."""
        if question_id in self.pinned_ids:
            self.pinned_ids.remove(question_id)
            return True
        if len(self.pinned_ids) >= MAX_PINNED:
            return False
        self.pinned_ids.append(question_id)
        return True
