"""API endpoints for the caller's profile and posting settings."""

from fastapi import APIRouter, Depends

from forum.core.auth_middleware import AuthContext, require_auth
from forum.core.errors import StoreError
from forum.core.logging import get_logger
from forum.core.schemas_profiles import (
    ProfileRecord,
    ProfileResponse,
    SettingsResponse,
    SyncProfileRequest,
    UpdateSettingsRequest,
)
from forum.core.schemas_questions import StudentYear
from forum.db.users import upsert_profile

logger = get_logger(__name__)

router = APIRouter()


@router.post("/me", response_model=ProfileResponse, response_model_exclude_none=True)
def sync_profile(
    request: SyncProfileRequest,
    auth: AuthContext = Depends(require_auth),
) -> ProfileResponse:
    """
    Create or refresh the caller's profile from their verified identity.

    The stored "post anonymously" preference is left untouched.
    """
    identity = auth.identity
    student_year = request.student_year or StudentYear.ALL
    payload = {
        "user_id": auth.user_id,
        "first_name": identity.first_name,
        "last_name": identity.last_name,
        "avatar_url": identity.avatar_url,
        "email": identity.email,
        "student_year": student_year.value,
    }
    try:
        row = upsert_profile(payload)
        return ProfileResponse(user=ProfileRecord.from_row(row))
    except Exception as e:
        error_msg = f"Failed to sync profile: {e}"
        logger.error(error_msg, extra={"user_id": auth.user_id})
        raise StoreError(error_msg) from e


@router.post("/me/settings", response_model=SettingsResponse, response_model_exclude_none=True)
def update_settings(
    request: UpdateSettingsRequest,
    auth: AuthContext = Depends(require_auth),
) -> SettingsResponse:
    """Update the caller's anonymity preference and, optionally, audience tags."""
    payload: dict = {"user_id": auth.user_id, "post_anonymously": request.post_anonymously}
    if request.audience_tags is not None:
        payload["audience_tags"] = [tag.value for tag in request.audience_tags]

    try:
        row = upsert_profile(payload)
        return SettingsResponse(
            post_anonymously=bool(row.get("post_anonymously")),
            audience_tags=row.get("audience_tags"),
        )
    except Exception as e:
        error_msg = f"Failed to update settings: {e}"
        logger.error(error_msg, extra={"user_id": auth.user_id})
        raise StoreError(error_msg) from e
