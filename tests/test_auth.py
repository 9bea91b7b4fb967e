"""Tests for bearer token verification and the auth dependencies."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from forum.core.auth_middleware import (
    SupabaseTokenVerifier,
    get_current_user,
    require_auth,
)
from forum.core.errors import AuthenticationRequired
from tests.fakes.fake_services import ALICE, FakeTokenVerifier


@pytest.fixture
def mock_supabase():
    """Mock Supabase client."""
    with patch("forum.db.supabase_client.get_supabase") as mock:
        yield mock.return_value


class TestSupabaseTokenVerifier:
    def test_reads_identity_metadata(self, mock_supabase):
        user = MagicMock()
        user.id = "user_123"
        user.email = "pat@example.com"
        user.user_metadata = {"given_name": "Pat", "family_name": "Lee", "picture": "https://p"}
        mock_supabase.auth.get_user.return_value = MagicMock(user=user)

        identity = SupabaseTokenVerifier().verify("token")

        mock_supabase.auth.get_user.assert_called_once_with("token")
        assert identity.user_id == "user_123"
        assert identity.first_name == "Pat"
        assert identity.last_name == "Lee"
        assert identity.avatar_url == "https://p"

    def test_no_user_means_unverified(self, mock_supabase):
        mock_supabase.auth.get_user.return_value = MagicMock(user=None)
        assert SupabaseTokenVerifier().verify("token") is None


class TestDependencies:
    @pytest.mark.asyncio
    async def test_no_credentials_is_anonymous(self):
        assert await get_current_user(credentials=None, verifier=FakeTokenVerifier()) is None

    @pytest.mark.asyncio
    async def test_verifier_error_is_anonymous(self):
        verifier = MagicMock()
        verifier.verify.side_effect = RuntimeError("auth service down")
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="token")

        assert await get_current_user(credentials=credentials, verifier=verifier) is None

    @pytest.mark.asyncio
    async def test_verified_token_yields_context(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="token-alice")
        auth = await get_current_user(
            credentials=credentials, verifier=FakeTokenVerifier({"token-alice": ALICE})
        )
        assert auth.user_id == "user_alice"
        assert auth.token == "token-alice"

    @pytest.mark.asyncio
    async def test_require_auth_raises_without_context(self):
        with pytest.raises(AuthenticationRequired):
            await require_auth(auth=None)
