"""Tests for GET/POST /api/comments."""

import pytest

from tests.fakes.fake_services import ALICE_HEADERS, BOB_HEADERS


@pytest.fixture
def question(fake_db):
    return fake_db.add_discussion("Move-in day advice")


def post_comment(client, question_id, text, headers=ALICE_HEADERS):
    return client.post(
        "/api/comments", json={"questionId": question_id, "text": text}, headers=headers
    )


class TestAddComment:
    def test_requires_auth(self, client, fake_db, question):
        response = client.post("/api/comments", json={"questionId": question["id"], "text": "Hi"})
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert fake_db.rows("comments") == []

    def test_rejects_forged_token(self, client, question):
        response = post_comment(client, question["id"], "Hi", headers={"Authorization": "Bearer x"})
        assert response.status_code == 401

    def test_unknown_question_is_not_found(self, client, fake_db):
        response = post_comment(client, "missing", "Hi")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert fake_db.rows("comments") == []

    def test_blank_text_is_validation_error(self, client, question):
        response = post_comment(client, question["id"], "   ")
        assert response.status_code == 400

    def test_named_comment_uses_profile(self, client, question):
        client.post("/api/me", json={}, headers=ALICE_HEADERS)

        response = post_comment(client, question["id"], " Bring a fan. ")

        assert response.status_code == 200
        comment = response.json()["comment"]
        assert comment["text"] == "Bring a fan."
        assert comment["questionId"] == question["id"]
        assert comment["userId"] == "user_alice"
        assert comment["authorName"] == "Alice Parker"
        assert comment["authorAvatarUrl"] == "https://img.example.com/alice.png"
        assert comment["isAnonymous"] is False
        assert comment["upvotes"] == 0

    def test_author_without_profile_gets_fallback_name(self, client, question):
        comment = post_comment(client, question["id"], "Hello", headers=BOB_HEADERS).json()["comment"]
        assert comment["userId"] == "user_bob"
        assert comment["authorName"] == "Forum member"


class TestAnonymity:
    def test_flag_is_captured_at_creation(self, client, fake_db, question):
        client.post("/api/me", json={}, headers=ALICE_HEADERS)

        client.post("/api/me/settings", json={"postAnonymously": True}, headers=ALICE_HEADERS)
        hidden = post_comment(client, question["id"], "Posted anonymously").json()["comment"]

        client.post("/api/me/settings", json={"postAnonymously": False}, headers=ALICE_HEADERS)
        named = post_comment(client, question["id"], "Posted with my name").json()["comment"]

        assert hidden["isAnonymous"] is True
        assert hidden["userId"] == "anonymous"
        assert hidden["authorName"] == "Anonymous"
        assert hidden.get("authorAvatarUrl") is None
        assert named["isAnonymous"] is False

        comments = client.get("/api/comments", params={"questionId": question["id"]}).json()[
            "comments"
        ]
        assert [c["text"] for c in comments] == ["Posted anonymously", "Posted with my name"]
        assert comments[0]["isAnonymous"] is True
        assert comments[0]["authorName"] == "Anonymous"
        assert comments[1]["authorName"] == "Alice Parker"
        assert fake_db.rows("comments")[0]["is_anonymous"] is True


class TestListComments:
    def test_oldest_first(self, client, question):
        post_comment(client, question["id"], "first")
        post_comment(client, question["id"], "second", headers=BOB_HEADERS)

        response = client.get("/api/comments", params={"questionId": question["id"]})

        assert response.status_code == 200
        assert [c["text"] for c in response.json()["comments"]] == ["first", "second"]

    def test_question_id_is_required(self, client):
        response = client.get("/api/comments")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_empty_list(self, client, question):
        response = client.get("/api/comments", params={"questionId": question["id"]})
        assert response.json() == {"comments": []}
