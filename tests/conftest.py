"""Pytest configuration and fixtures."""

import os

# forum.main reads settings at import time
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("FORUM_ENV", "test")

from contextlib import ExitStack  # noqa: E402
from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from forum.core.auth_middleware import get_token_verifier  # noqa: E402
from forum.core.config import Settings, get_settings  # noqa: E402
from forum.core.llm import get_completion_client  # noqa: E402
from tests.fakes.fake_services import (  # noqa: E402
    ALICE,
    BOB,
    FakeTokenVerifier,
    ScriptedCompletionClient,
)
from tests.fakes.fake_supabase import FakeSupabase  # noqa: E402

DB_MODULES = (
    "forum.db.questions",
    "forum.db.comments",
    "forum.db.counters",
    "forum.db.likes",
    "forum.db.bookmarks",
    "forum.db.users",
)


@pytest.fixture
def fake_db():
    """Patch every store module onto one in-memory Supabase fake."""
    db = FakeSupabase()
    with ExitStack() as stack:
        for module in DB_MODULES:
            stack.enter_context(patch(f"{module}.get_supabase", return_value=db))
        yield db


@pytest.fixture
def llm():
    return ScriptedCompletionClient()


@pytest.fixture
def verifier():
    return FakeTokenVerifier({"token-alice": ALICE, "token-bob": BOB})


@pytest.fixture
def settings() -> Settings:
    return get_settings().model_copy()


@pytest.fixture
def client(fake_db, llm, verifier, settings):
    """TestClient with the store, model and identity provider replaced by fakes."""
    from forum.main import app

    app.dependency_overrides[get_completion_client] = lambda: llm
    app.dependency_overrides[get_token_verifier] = lambda: verifier
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
