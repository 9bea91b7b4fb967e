"""Supabase client shared by the store modules and the token verifier."""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from forum.core.config import get_settings


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the service-role Supabase client (cached singleton).

    The client never persists an auth session; bearer tokens from callers are
    only passed to ``auth.get_user`` for verification.

    Raises:
        RuntimeError: If client initialization fails
    """
    try:
        settings = get_settings()
        options = ClientOptions(
            schema=settings.SUPABASE_SCHEMA,
            postgrest_client_timeout=settings.STORE_TIMEOUT_SECONDS,
            auto_refresh_token=False,
            persist_session=False,
        )
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY, options)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize forum store client: {e}") from e
