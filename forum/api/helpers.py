"""Shared helpers for API route modules."""

from forum.core.config import Settings


def clamp_limit(value: str | int | None, settings: Settings) -> int:
    """Clamp a page size into [1, MAX_PAGE_SIZE]; unparsable values use the default."""
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return settings.DEFAULT_PAGE_SIZE
    return max(1, min(settings.MAX_PAGE_SIZE, n))
