"""Python client for the forum API with a local entity store."""

from forum.client.api_client import ForumApiClient, ForumApiError
from forum.client.store import ForumStore
from forum.client.views import FilterMode, ForumSections, ForumView, SortMode, build_sections

__all__ = [
    "FilterMode",
    "ForumApiClient",
    "ForumApiError",
    "ForumSections",
    "ForumStore",
    "ForumView",
    "SortMode",
    "build_sections",
]
