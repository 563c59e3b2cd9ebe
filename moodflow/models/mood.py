"""
Mood entry model.
"""
import uuid
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Column, ForeignKey
from sqlmodel import Field, Relationship, Index, CheckConstraint

from .base import BaseModel
from .enums import MOOD_ORDER

if TYPE_CHECKING:
    from .user import User

_MOOD_TYPES_SQL = ", ".join(f"'{mood.value}'" for mood in MOOD_ORDER)


class Mood(BaseModel, table=True):
    """
    One recorded mood for a user.
    """
    __tablename__ = "moods"

    user_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False
        )
    )
    mood_type: str = Field(..., max_length=20)
    emoji: str = Field(..., max_length=16)
    note: Optional[str] = Field(None, max_length=500)
    mood_score: int = Field(..., ge=1, le=5)

    user: "User" = Relationship(back_populates="moods")

    __table_args__ = (
        CheckConstraint(f"mood_type IN ({_MOOD_TYPES_SQL})", name="check_mood_type"),
        CheckConstraint("mood_score >= 1 AND mood_score <= 5", name="check_mood_score"),
        # For a user's timeline, newest first
        Index("idx_moods_user_id_created_at", "user_id", "created_at"),
    )
