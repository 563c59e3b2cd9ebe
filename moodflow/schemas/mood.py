"""
Mood schemas.
"""
import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from moodflow.models.enums import MoodType, MIN_MOOD_SCORE, MAX_MOOD_SCORE
from moodflow.schemas.base import TimestampMixin


def _clean_note(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class MoodBase(BaseModel):
    """Fields shared by create and update requests."""
    mood_type: MoodType
    emoji: str = Field(..., min_length=1, max_length=16)
    note: Optional[str] = Field(None, max_length=500)
    mood_score: int = Field(..., ge=MIN_MOOD_SCORE, le=MAX_MOOD_SCORE)

    @field_validator('note')
    @classmethod
    def validate_note(cls, v):
        return _clean_note(v)


class MoodCreate(MoodBase):
    """Mood creation schema."""
    user_id: uuid.UUID


class MoodUpdate(MoodBase):
    """Mood update schema. Replaces every editable field."""
    pass


class MoodResponse(TimestampMixin):
    """Mood response schema."""
    id: uuid.UUID
    user_id: uuid.UUID
    mood_type: MoodType
    emoji: str
    note: Optional[str] = None
    mood_score: int
    created_at: datetime
    updated_at: datetime


class MoodTypeStat(BaseModel):
    """Per-kind count and average score."""
    mood_type: MoodType
    count: int
    avg_score: float


class MoodStatisticsResponse(BaseModel):
    mood_distribution: List[MoodTypeStat]
    total_entries: int
    average_mood_score: float


class DailyMoodAverage(BaseModel):
    """Average score of one calendar day."""
    date: date
    avg_score: float
    entries_count: int


class MoodEntry(BaseModel):
    """
    A mood entry as held by an entry store.

    This is the record shape of the local JSON blob and the input of the
    statistics engine; SQL rows are converted to it by ``SqlEntryStore``.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    mood: MoodType
    emoji: str
    note: Optional[str] = None
    timestamp: datetime

    @field_validator('note')
    @classmethod
    def validate_note(cls, v):
        return _clean_note(v)
