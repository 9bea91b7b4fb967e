"""Authentication dependencies for FastAPI.

Bearer tokens are verified against Supabase Auth; the verified subject becomes
the acting user id. Endpoints that allow anonymous callers depend on
``get_current_user``; the rest depend on ``require_auth``.
"""

import asyncio
from functools import lru_cache
from typing import Optional, Protocol

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from forum.core.errors import AuthenticationRequired
from forum.core.logging import get_logger

logger = get_logger(__name__)

# HTTP Bearer scheme for Authorization header
security = HTTPBearer(auto_error=False)


class VerifiedIdentity(BaseModel):
    """What the identity provider vouches for."""

    user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None


class TokenVerifier(Protocol):
    def verify(self, token: str) -> VerifiedIdentity | None: ...


class SupabaseTokenVerifier:
    """Verify bearer tokens with Supabase Auth (signature and expiry)."""

    def verify(self, token: str) -> VerifiedIdentity | None:
        from forum.db.supabase_client import get_supabase

        auth_response = get_supabase().auth.get_user(token)
        if not auth_response or not auth_response.user:
            return None

        user = auth_response.user
        metadata = user.user_metadata or {}
        return VerifiedIdentity(
            user_id=str(user.id),
            email=user.email,
            first_name=metadata.get("first_name") or metadata.get("given_name"),
            last_name=metadata.get("last_name") or metadata.get("family_name"),
            avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
        )


@lru_cache(maxsize=1)
def get_token_verifier() -> TokenVerifier:
    """FastAPI dependency returning the configured token verifier."""
    return SupabaseTokenVerifier()


class AuthContext:
    """Context object containing the authenticated caller."""

    def __init__(self, identity: VerifiedIdentity, token: str):
        self.identity = identity
        self.token = token
        self.user_id = identity.user_id


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Optional[AuthContext]:
    """
    Extract and validate the current user from the request.

    Returns None if no valid auth is present (for optional auth endpoints).
    """
    if not credentials:
        return None

    token = credentials.credentials
    try:
        identity = await asyncio.to_thread(verifier.verify, token)
    except Exception as e:
        logger.warning(f"Auth error: {e}")
        return None

    if not identity:
        return None
    return AuthContext(identity=identity, token=token)


async def require_auth(
    auth: Optional[AuthContext] = Depends(get_current_user),
) -> AuthContext:
    """Require authentication. Raises 401 if not authenticated."""
    if not auth:
        raise AuthenticationRequired("Not authenticated")
    return auth
