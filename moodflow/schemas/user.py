"""
User schemas.
"""
import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from moodflow.schemas.base import TimestampMixin


class UserCreate(BaseModel):
    """Registration request."""
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Profile update request. Both fields are required."""
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class AuthResponse(BaseModel):
    """Returned by register and login."""
    id: uuid.UUID
    username: str
    email: str
    token: str
    token_type: str = "bearer"


class UserSummary(TimestampMixin):
    """Listing row."""
    id: uuid.UUID
    username: str
    email: str
    created_at: datetime
    total_moods: int = 0


class UserProfileResponse(UserSummary):
    avg_mood_score: float = 0.0
