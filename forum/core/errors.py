"""Error taxonomy shared by handlers, the answer pipeline and the store layer.

Every error carries a short machine-readable ``code`` and the HTTP status it
maps to; ``forum.main`` renders them as ``{"error": code, "detail": message}``.
"""

from typing import Any


class ForumError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = 500
    code: str = "server_error"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "detail": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationFailed(ForumError):
    """Missing or malformed input, rejected before any store or model call."""

    status_code = 400
    code = "validation_error"


class AuthenticationRequired(ForumError):
    """Missing or unverifiable bearer token on an endpoint that needs one."""

    status_code = 401
    code = "unauthorized"


class NotFound(ForumError):
    status_code = 404
    code = "not_found"


class ModerationRejected(ForumError):
    """Discussion topic refused by the moderation check."""

    status_code = 422
    code = "moderation_rejected"


class StoreError(ForumError):
    """Query, insert or update against the relational store failed."""

    status_code = 500
    code = "store_error"


class UpstreamModelError(ForumError):
    """Language model returned an empty or unparsable completion where it must not."""

    status_code = 500
    code = "upstream_model_error"
