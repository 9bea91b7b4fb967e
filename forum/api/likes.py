"""API endpoint for toggling likes on questions and comments."""

from fastapi import APIRouter, Depends

from forum.core.auth_middleware import AuthContext, require_auth
from forum.core.config import Settings, get_settings
from forum.core.engagement import toggle_like
from forum.core.errors import ForumError, StoreError, ValidationFailed
from forum.core.logging import get_logger
from forum.core.schemas_engagement import ToggleLikeRequest, ToggleLikeResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/likes", response_model=ToggleLikeResponse)
def toggle_like_endpoint(
    request: ToggleLikeRequest,
    auth: AuthContext = Depends(require_auth),
    settings: Settings = Depends(get_settings),
) -> ToggleLikeResponse:
    """Flip the caller's like on a target and return the new counter value."""
    target_id = request.target_id.strip()
    if not target_id:
        raise ValidationFailed("Invalid targetId")

    try:
        return toggle_like(
            user_id=auth.user_id,
            target_type=request.target_type,
            target_id=target_id,
            counter_mode=settings.COUNTER_MODE,
        )
    except ForumError:
        raise
    except Exception as e:
        error_msg = f"Failed to toggle like: {e}"
        logger.error(error_msg, extra={"target_id": target_id, "user_id": auth.user_id})
        raise StoreError(error_msg) from e
