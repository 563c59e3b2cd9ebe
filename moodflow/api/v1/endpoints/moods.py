"""
Mood endpoints.
"""
import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlmodel import Session

from moodflow.api.dependencies import ensure_same_user, get_current_user, get_request_id
from moodflow.core.database import get_session
from moodflow.core.exceptions import MoodEntryNotFoundError, UserNotFoundError
from moodflow.core.logging_config import log_error
from moodflow.core.rate_limiting import mood_rate_limit
from moodflow.core.time_utils import local_today
from moodflow.models.user import User
from moodflow.schemas.analytics import MoodStats
from moodflow.schemas.mood import (
    DailyMoodAverage,
    MoodCreate,
    MoodResponse,
    MoodStatisticsResponse,
    MoodUpdate,
)
from moodflow.services.mood_service import MoodService
from moodflow.services.stats_service import compute_stats
from moodflow.stores.sql import SqlEntryStore

router = APIRouter(prefix="/moods", tags=["moods"])


@router.post(
    "",
    response_model=MoodResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or out-of-range fields"},
        401: {"description": "Not authenticated"},
        403: {"description": "Mood belongs to another user"},
        404: {"description": "User not found"},
    }
)
@mood_rate_limit("create")
async def create_mood(
    request: Request,
    mood_data: MoodCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Record a new mood entry."""
    ensure_same_user(mood_data.user_id, current_user)
    try:
        return MoodService(session).create_mood(mood_data)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except Exception as e:
        log_error(e, request_id=request_id, user_email=current_user.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create mood entry"
        )


@router.get(
    "/user/{user_id}",
    response_model=List[MoodResponse],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's entries"},
    }
)
@mood_rate_limit("list")
async def get_user_moods(
    request: Request,
    user_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    """A user's mood entries, newest first."""
    ensure_same_user(user_id, current_user)
    return MoodService(session).get_user_moods(user_id, limit)


@router.get(
    "/stats/{user_id}",
    response_model=MoodStatisticsResponse,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's statistics"},
    }
)
@mood_rate_limit("analytics")
async def get_mood_statistics(
    request: Request,
    user_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
):
    """Per-kind counts and average scores, plus the overall average score."""
    ensure_same_user(user_id, current_user)
    return MoodService(session).get_mood_statistics(user_id)


@router.get(
    "/weekly/{user_id}",
    response_model=List[DailyMoodAverage],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's trend"},
    }
)
@mood_rate_limit("analytics")
async def get_weekly_trend(
    request: Request,
    user_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
):
    """Average score per day over the trailing seven days, newest first."""
    ensure_same_user(user_id, current_user)
    return MoodService(session).get_weekly_trend(user_id)


@router.get(
    "/summary/{user_id}",
    response_model=MoodStats,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Another user's summary"},
    }
)
@mood_rate_limit("analytics")
async def get_mood_summary(
    request: Request,
    user_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
):
    """
    Dashboard statistics: distribution, most common mood, streak, entries
    this week and the seven-day trend.
    """
    ensure_same_user(user_id, current_user)
    store = SqlEntryStore(session, user_id)
    tz = store.service.tz
    return compute_stats(store.list_all(), local_today(tz), tz)


@router.put(
    "/{mood_id}",
    response_model=MoodResponse,
    responses={
        400: {"description": "Missing or out-of-range fields"},
        401: {"description": "Not authenticated"},
        404: {"description": "Mood entry not found"},
    }
)
@mood_rate_limit("update")
async def update_mood(
    request: Request,
    mood_id: uuid.UUID,
    mood_data: MoodUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Replace a mood entry's type, emoji, note and score."""
    try:
        return MoodService(session).update_mood(mood_id, current_user.id, mood_data)
    except MoodEntryNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Mood entry not found"
        )
    except Exception as e:
        log_error(e, request_id=request_id, user_email=current_user.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update mood entry"
        )


@router.delete(
    "/{mood_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Mood entry not found"},
    }
)
@mood_rate_limit("delete")
async def delete_mood(
    request: Request,
    mood_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """Delete a mood entry."""
    try:
        MoodService(session).delete_mood(mood_id, current_user.id)
    except MoodEntryNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Mood entry not found"
        )
    except Exception as e:
        log_error(e, request_id=request_id, user_email=current_user.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete mood entry"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
