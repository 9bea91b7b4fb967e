"""Test health check endpoint."""

from fastapi.testclient import TestClient

from forum.main import app

client = TestClient(app)


def test_health_check():
    """Test that /health returns 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_unknown_route_is_404():
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
