from fastapi import Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..core.config import settings
from ..core.database import get_db, get_redis
from ..core.errors import Forbidden, InvalidToken, TooManyRequests, Unauthenticated
from ..core.security import (
    ADMIN_COOKIE, PATIENT_COOKIE, UserRole, verify_token
)
from ..models.user import User

logger = logging.getLogger(__name__)


def _load_user(token: str, db: Session) -> User:
    token_payload = verify_token(token)
    if not token_payload or token_payload.user_id is None:
        raise InvalidToken()

    user = db.query(User).filter(User.id == token_payload.user_id).first()
    if not user:
        raise InvalidToken("User for this token no longer exists")
    return user


def require_role(cookie_name: str, *allowed_roles: UserRole):
    """Create a dependency that authenticates from ``cookie_name`` and checks the user's role."""
    audience = allowed_roles[0].value if len(allowed_roles) == 1 else "User"

    async def role_checker(
        request: Request,
        db: Session = Depends(get_db)
    ) -> User:
        token = request.cookies.get(cookie_name)
        if not token:
            raise Unauthenticated(f"{audience} not authenticated")

        user = _load_user(token, db)
        if user.role not in allowed_roles:
            logger.warning(f"User {user.id} ({user.role.value}) refused on {request.url.path}")
            raise Forbidden(f"{user.role.value} not authorized for this resource")

        request.state.user = user
        return user

    return role_checker


# Specific role dependencies
get_admin_user = require_role(ADMIN_COOKIE, UserRole.ADMIN)
get_patient_user = require_role(PATIENT_COOKIE, UserRole.PATIENT)


def session_token(request: Request) -> Optional[str]:
    """Token from a Bearer header, else from either session cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return request.cookies.get(ADMIN_COOKIE) or request.cookies.get(PATIENT_COOKIE)


async def get_session_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """Any authenticated user, whatever the role."""
    token = session_token(request)
    if not token:
        raise Unauthenticated()
    user = _load_user(token, db)
    request.state.user = user
    return user


# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client=Depends(get_redis)
) -> None:
    """Fixed-window rate limiting per client address and route."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{request.url.path}:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.RATE_LIMIT_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.RATE_LIMIT_REQUESTS:
            raise TooManyRequests()
        redis_client.incr(key)
