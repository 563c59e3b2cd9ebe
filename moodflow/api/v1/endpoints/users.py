"""
User account endpoints: registration, login and profiles.
"""
import uuid
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from moodflow.api.dependencies import ensure_same_user, get_current_user, get_request_id
from moodflow.core.database import get_session
from moodflow.core.exceptions import (
    InvalidCredentialsError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserNotFoundError,
    WeakPasswordError,
)
from moodflow.core.logging_config import log_error, log_info
from moodflow.core.rate_limiting import auth_rate_limit, user_rate_limit
from moodflow.core.security import create_access_token
from moodflow.models.user import User
from moodflow.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserProfileResponse,
    UserSummary,
    UserUpdate,
)
from moodflow.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(str(user.id), username=user.username)
    return AuthResponse(id=user.id, username=user.username, email=user.email, token=token)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields, weak password, or username/email taken"},
    }
)
@auth_rate_limit("register")
async def register(
    request: Request,
    user_data: UserCreate,
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Create an account and return a bearer token."""
    try:
        user = UserService(session).create_user(user_data)
    except (WeakPasswordError, UserAlreadyExistsError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except Exception as e:
        log_error(e, request_id=request_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )
    return _auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account inactive"},
    }
)
@auth_rate_limit("login")
async def login(
    request: Request,
    credentials: UserLogin,
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Exchange username and password for a bearer token."""
    try:
        user = UserService(session).authenticate_user(credentials.username, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message
        )
    except Exception as e:
        log_error(e, request_id=request_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )
    log_info(f"User logged in: {user.username}")
    return _auth_response(user)


@router.get(
    "/profile/{user_id}",
    response_model=UserProfileResponse,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's profile"},
        404: {"description": "User not found"},
    }
)
@user_rate_limit("profile")
async def get_profile(
    request: Request,
    user_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
):
    """Profile with mood count and average score."""
    ensure_same_user(user_id, current_user)
    try:
        return UserService(session).get_user_profile(user_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )


@router.put(
    "/profile/{user_id}",
    response_model=UserProfileResponse,
    responses={
        400: {"description": "Missing fields or username/email taken"},
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's profile"},
        404: {"description": "User not found"},
    }
)
@user_rate_limit("update")
async def update_profile(
    request: Request,
    user_id: uuid.UUID,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Change username and email."""
    ensure_same_user(user_id, current_user)
    service = UserService(session)
    try:
        service.update_user(user_id, user_data)
        return service.get_user_profile(user_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except Exception as e:
        log_error(e, request_id=request_id, user_email=current_user.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user profile"
        )


@router.get(
    "",
    response_model=List[UserSummary],
    responses={
        401: {"description": "Not authenticated"},
    }
)
@user_rate_limit("list")
async def list_users(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
):
    """All users with their mood counts, newest first."""
    return UserService(session).list_users()
