"""
Analytics schemas.
"""
from datetime import date
from typing import Dict, List

from pydantic import BaseModel

from moodflow.models.enums import MoodType


class WeeklyBucket(BaseModel):
    """One day of the weekly trend."""
    day: str
    date: date
    score: int


class MoodStats(BaseModel):
    """Snapshot derived from a full entry collection; never persisted."""
    total_entries: int
    mood_distribution: Dict[MoodType, int]
    mood_percentages: Dict[MoodType, int]
    average_mood: MoodType
    streak_count: int
    this_week: int
    weekly_data: List[WeeklyBucket]
