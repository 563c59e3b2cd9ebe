"""
Shared API dependencies: request id, current user and ownership checks.
"""
import uuid
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlmodel import Session

from moodflow.core.config import settings
from moodflow.core.database import get_session
from moodflow.core.logging_config import log_info
from moodflow.core.security import decode_access_token
from moodflow.middleware.request_logging import request_id_ctx
from moodflow.models.user import User
from moodflow.services.user_service import UserService

# auto_error is off so a missing header gets the same 401 body as a bad token
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/users/login",
    auto_error=False,
)


def get_request_id() -> str:
    """The current request ID, or 'unknown' outside a request."""
    return request_id_ctx.get()


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    session: Annotated[Session, Depends(get_session)],
) -> User:
    """
    Resolve the bearer token to an active user.

    401 for a missing, invalid or expired token or an unknown user; 403 for an
    inactive account.
    """
    if not token:
        raise _unauthenticated()

    try:
        claims = decode_access_token(token)
    except JWTError:
        raise _unauthenticated()

    user = UserService(session).get_user_by_id(claims["sub"])
    if user is None:
        raise _unauthenticated()

    if not user.is_active:
        log_info("Inactive user access attempt", user_id=user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )
    return user


def ensure_same_user(user_id: uuid.UUID, current_user: User) -> None:
    """Reject access to another user's data."""
    if user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access another user's data"
        )
