from fastapi import APIRouter, Depends, Response

from ...api.deps import get_session_user
from ...core.security import create_access_token
from ...models.user import User
from ...schemas.auth import TokenRefreshResponse
from .users import set_session_cookie

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/refresh", response_model=TokenRefreshResponse)
async def refresh_token(
    response: Response,
    current_user: User = Depends(get_session_user)
):
    """Issue a fresh token for a still-valid session and reset its cookie."""
    token = create_access_token(current_user.id, current_user.role)
    set_session_cookie(response, current_user, token)
    return TokenRefreshResponse(message="Token refreshed", token=token)
