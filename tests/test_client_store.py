"""Tests for the client-side entity store."""

from forum.client.store import ForumStore
from forum.core.schemas_ask import AskResult, AskStatus, DuplicateType
from forum.core.schemas_engagement import (
    LikeTargetType,
    ToggleBookmarkResponse,
    ToggleLikeResponse,
)
from tests.fakes.records import make_comment, make_question


class TestMerging:
    def test_fetched_records_keep_loaded_comments(self):
        store = ForumStore()
        store.merge_fetched([make_question("q1")])
        store.set_comments("q1", [make_comment("c1", "q1")])

        store.merge_fetched([make_question("q1", upvotes=5)])

        merged = store.get("q1")
        assert merged.upvotes == 5
        assert [c.id for c in merged.comments] == ["c1"]

    def test_fetched_records_append_in_order(self):
        store = ForumStore()
        store.merge_fetched([make_question("q1"), make_question("q2")])
        store.merge_fetched([make_question("q3"), make_question("q1")])
        assert store.order == ["q1", "q2", "q3"]

    def test_mutation_result_moves_to_front(self):
        store = ForumStore()
        store.merge_fetched([make_question("q1"), make_question("q2")])

        store.merge_mutation(make_question("q2", text="Edited"))

        assert store.order == ["q2", "q1"]
        assert store.get("q2").question_text == "Edited"

    def test_embedded_comments_are_loaded(self):
        store = ForumStore()
        record = make_question("q1").model_copy(update={"comments": [make_comment("c1", "q1")]})
        store.merge_fetched([record])
        assert store.questions["q1"].comments == []
        assert [c.id for c in store.get("q1").comments] == ["c1"]

    def test_ask_results(self):
        store = ForumStore()
        store.merge_fetched([make_question("old")])

        store.merge_ask_result(
            AskResult(
                status=AskStatus.ANSWERED,
                answer="Answer",
                record_id="old",
                duplicate=True,
                duplicate_type=DuplicateType.EXACT,
                question=make_question("old"),
            )
        )
        assert store.order == ["old"]

        store.merge_ask_result(
            AskResult(status=AskStatus.ANSWERED, record_id="new", question=make_question("new"))
        )
        assert store.order == ["new", "old"]

        store.merge_ask_result(AskResult(status=AskStatus.REJECTED, reason="Out of scope"))
        assert store.order == ["new", "old"]

    def test_missing_question(self):
        assert ForumStore().get("nope") is None


class TestComments:
    def test_add_comment_appends_once(self):
        store = ForumStore()
        store.merge_fetched([make_question("q1")])
        comment = make_comment("c1", "q1")

        store.add_comment(comment)
        store.add_comment(comment)

        assert [c.id for c in store.comments_for("q1")] == ["c1"]

    def test_set_comments_replaces_list(self):
        store = ForumStore()
        store.set_comments("q1", [make_comment("c1", "q1")])
        store.set_comments("q1", [make_comment("c2", "q1")])
        assert [c.id for c in store.comments_for("q1")] == ["c2"]


class TestRelations:
    def test_question_like_updates_count_and_set(self):
        store = ForumStore()
        store.merge_fetched([make_question("q1")])

        store.apply_like(LikeTargetType.QUESTION, "q1", ToggleLikeResponse(liked=True, new_count=3))
        assert store.get("q1").upvotes == 3
        assert "q1" in store.liked_question_ids

        store.apply_like(LikeTargetType.QUESTION, "q1", ToggleLikeResponse(liked=False, new_count=2))
        assert store.get("q1").upvotes == 2
        assert "q1" not in store.liked_question_ids

    def test_comment_like(self):
        store = ForumStore()
        store.add_comment(make_comment("c1", "q1"))

        store.apply_like(LikeTargetType.COMMENT, "c1", ToggleLikeResponse(liked=True, new_count=1))

        assert store.comments["c1"].upvotes == 1
        assert store.liked_comment_ids == {"c1"}
        assert store.liked_question_ids == set()

    def test_bookmarks(self):
        store = ForumStore()
        store.apply_bookmark("q1", ToggleBookmarkResponse(bookmarked=True))
        store.apply_bookmark("q2", ToggleBookmarkResponse(bookmarked=True))
        store.apply_bookmark("q1", ToggleBookmarkResponse(bookmarked=False))
        assert store.bookmarked_ids == {"q2"}

        store.replace_bookmarks([make_question("q3")])
        assert store.bookmarked_ids == {"q3"}
        assert store.get("q3") is not None

    def test_pin_limit(self):
        store = ForumStore()
        assert store.toggle_pin("q1") is True
        assert store.toggle_pin("q2") is True
        assert store.toggle_pin("q3") is False
        assert store.pinned_ids == ["q1", "q2"]

        assert store.toggle_pin("q1") is True
        assert store.toggle_pin("q3") is True
        assert store.pinned_ids == ["q2", "q3"]
