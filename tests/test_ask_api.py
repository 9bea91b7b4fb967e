"""Tests for POST /api/ask."""

from tests.fakes.fake_services import ALICE_HEADERS

ANSWERED = {"status": "answered", "answer": "See the academic calendar."}


def test_new_question_is_answered_and_stored(client, fake_db, llm):
    llm.queue(ANSWERED)

    response = client.post(
        "/api/ask", json={"question": "When does spring break start?", "studentYear": "Junior"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "answered"
    assert body["answer"] == ANSWERED["answer"]
    assert body["duplicate"] is False
    assert "duplicateType" not in body
    assert body["question"]["id"] == body["recordId"]
    assert body["question"]["studentYear"] == "Junior"
    assert fake_db.get("questions", body["recordId"])["user_id"] is None


def test_signed_in_author_is_recorded(client, fake_db, llm):
    llm.queue(ANSWERED)

    body = client.post(
        "/api/ask", json={"question": "When does spring break start?"}, headers=ALICE_HEADERS
    ).json()

    assert fake_db.get("questions", body["recordId"])["user_id"] == "user_alice"
    assert body["question"]["userId"] == "user_alice"


def test_unverifiable_token_is_treated_as_anonymous(client, fake_db, llm):
    llm.queue(ANSWERED)

    response = client.post(
        "/api/ask",
        json={"question": "When does spring break start?"},
        headers={"Authorization": "Bearer forged"},
    )

    assert response.status_code == 200
    assert fake_db.get("questions", response.json()["recordId"])["user_id"] is None


def test_exact_duplicate_response(client, fake_db, llm):
    row = fake_db.add_ai_question("when is tuition due", answer="August 15")

    body = client.post("/api/ask", json={"question": "When Is Tuition Due?"}).json()

    assert body["duplicate"] is True
    assert body["duplicateType"] == "exact"
    assert body["recordId"] == row["id"]
    assert body["answer"] == "August 15"
    assert llm.calls == []


def test_rejection_response(client, fake_db, llm):
    llm.queue({"status": "rejected", "reason": "I can only help with university topics."})

    response = client.post("/api/ask", json={"question": "Best pizza in Rome?"})

    assert response.status_code == 200
    body = response.json()
    assert body == {
        "status": "rejected",
        "reason": "I can only help with university topics.",
        "duplicate": False,
    }
    assert fake_db.rows("questions") == []


def test_short_question_is_validation_error(client, llm):
    response = client.post("/api/ask", json={"question": "hi"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert llm.calls == []


def test_missing_question_field_is_validation_error(client):
    response = client.post("/api/ask", json={"studentYear": "Senior"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_model_failure_is_upstream_error(client, fake_db, llm):
    llm.queue(RuntimeError("connection reset"))

    response = client.post("/api/ask", json={"question": "When does spring break start?"})

    assert response.status_code == 500
    assert response.json()["error"] == "upstream_model_error"
    assert fake_db.rows("questions") == []
