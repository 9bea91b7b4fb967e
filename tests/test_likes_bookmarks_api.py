"""Tests for POST /api/likes and GET/POST /api/bookmarks."""

import pytest

from tests.fakes.fake_services import ALICE_HEADERS, BOB_HEADERS


@pytest.fixture
def question(fake_db):
    return fake_db.add_ai_question("when is tuition due")


def like(client, target_id, target_type="question", headers=ALICE_HEADERS):
    return client.post(
        "/api/likes", json={"targetType": target_type, "targetId": target_id}, headers=headers
    )


class TestLikes:
    def test_requires_auth(self, client, question):
        response = client.post(
            "/api/likes", json={"targetType": "question", "targetId": question["id"]}
        )
        assert response.status_code == 401

    def test_like_then_unlike(self, client, question):
        assert like(client, question["id"]).json() == {"liked": True, "newCount": 1}
        assert like(client, question["id"], headers=BOB_HEADERS).json() == {
            "liked": True,
            "newCount": 2,
        }
        assert like(client, question["id"]).json() == {"liked": False, "newCount": 1}

    def test_comment_like(self, client, fake_db, question):
        comment = fake_db.add_row(
            "comments", question_id=question["id"], user_id="user_bob", text="Aug 15"
        )
        assert like(client, comment["id"], target_type="comment").json() == {
            "liked": True,
            "newCount": 1,
        }

    def test_read_modify_write_mode(self, client, fake_db, question, settings):
        settings.COUNTER_MODE = "read_modify_write"
        assert like(client, question["id"]).json()["newCount"] == 1
        assert ("adjust_upvotes", "rpc") not in fake_db.calls

    def test_unknown_target_type_is_validation_error(self, client, question):
        response = like(client, question["id"], target_type="answer")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_blank_target_id_is_validation_error(self, client):
        assert like(client, "  ").status_code == 400

    def test_missing_target_is_not_found(self, client):
        response = like(client, "missing")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestBookmarks:
    def test_toggle_on_then_off(self, client, question):
        body = {"questionId": question["id"]}
        first = client.post("/api/bookmarks", json=body, headers=ALICE_HEADERS)
        second = client.post("/api/bookmarks", json=body, headers=ALICE_HEADERS)
        assert first.json() == {"bookmarked": True}
        assert second.json() == {"bookmarked": False}

    def test_list_most_recent_first(self, client, fake_db, question):
        other = fake_db.add_discussion("tailgating tips")
        client.post("/api/bookmarks", json={"questionId": question["id"]}, headers=ALICE_HEADERS)
        client.post("/api/bookmarks", json={"questionId": other["id"]}, headers=ALICE_HEADERS)
        client.post("/api/bookmarks", json={"questionId": other["id"]}, headers=BOB_HEADERS)

        response = client.get("/api/bookmarks", headers=ALICE_HEADERS)

        assert response.status_code == 200
        bookmarks = response.json()["bookmarks"]
        assert [b["id"] for b in bookmarks] == [other["id"], question["id"]]
        assert bookmarks[1]["aiAnswer"] == "Stored answer."

    def test_bookmark_does_not_change_upvotes(self, client, fake_db, question):
        client.post("/api/bookmarks", json={"questionId": question["id"]}, headers=ALICE_HEADERS)
        assert fake_db.get("questions", question["id"])["upvotes"] == 0
        assert fake_db.rows("question_likes") == []

    def test_unknown_question_is_not_found(self, client):
        response = client.post(
            "/api/bookmarks", json={"questionId": "missing"}, headers=ALICE_HEADERS
        )
        assert response.status_code == 404

    def test_list_requires_auth(self, client):
        assert client.get("/api/bookmarks").status_code == 401
