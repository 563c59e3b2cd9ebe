"""
Mood service for handling mood-related operations.
"""
import uuid
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from moodflow.core.config import settings
from moodflow.core.exceptions import MoodEntryNotFoundError, UserNotFoundError
from moodflow.core.logging_config import log_error, log_info
from moodflow.core.time_utils import ensure_utc, get_zone, local_today, utc_now
from moodflow.models.enums import MOOD_ORDER
from moodflow.models.mood import Mood
from moodflow.models.user import User
from moodflow.schemas.mood import (
    DailyMoodAverage,
    MoodCreate,
    MoodStatisticsResponse,
    MoodTypeStat,
    MoodUpdate,
)
from moodflow.services.stats_service import WEEK_DAYS, entry_day

DEFAULT_MOOD_PAGE_LIMIT = 50
MAX_MOOD_PAGE_LIMIT = 500


class MoodService:
    """Service class for mood operations."""

    def __init__(self, session: Session, tz: Optional[tzinfo] = None):
        self.session = session
        self.tz = tz or get_zone(settings.time_zone)

    @staticmethod
    def _normalize_limit(limit: Optional[int]) -> int:
        if limit is None or limit <= 0:
            return DEFAULT_MOOD_PAGE_LIMIT
        return min(limit, MAX_MOOD_PAGE_LIMIT)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    def create_mood(self, mood_data: MoodCreate) -> Mood:
        """Record a mood for a user."""
        if self.session.get(User, mood_data.user_id) is None:
            raise UserNotFoundError("User not found")

        mood = Mood(
            user_id=mood_data.user_id,
            mood_type=mood_data.mood_type.value,
            emoji=mood_data.emoji,
            note=mood_data.note,
            mood_score=mood_data.mood_score,
        )
        self.session.add(mood)
        self._commit()
        self.session.refresh(mood)
        log_info(f"Mood recorded for user {mood.user_id}: {mood.id}")
        return mood

    def get_user_moods(self, user_id: uuid.UUID, limit: Optional[int] = None) -> List[Mood]:
        """A user's moods, newest first."""
        statement = (
            select(Mood)
            .where(Mood.user_id == user_id)
            .order_by(Mood.created_at.desc())
            .limit(self._normalize_limit(limit))
        )
        return list(self.session.exec(statement))

    def get_all_user_moods(self, user_id: uuid.UUID) -> List[Mood]:
        """Every mood of a user, newest first; used for statistics."""
        statement = select(Mood).where(Mood.user_id == user_id).order_by(Mood.created_at.desc())
        return list(self.session.exec(statement))

    def get_mood_for_user(self, mood_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Mood]:
        """Get a mood by ID, only if it belongs to ``user_id``."""
        statement = select(Mood).where(Mood.id == mood_id, Mood.user_id == user_id)
        return self.session.exec(statement).first()

    def update_mood(self, mood_id: uuid.UUID, user_id: uuid.UUID, mood_data: MoodUpdate) -> Mood:
        """Replace the editable fields of a mood."""
        mood = self.get_mood_for_user(mood_id, user_id)
        if not mood:
            raise MoodEntryNotFoundError("Mood entry not found")

        mood.mood_type = mood_data.mood_type.value
        mood.emoji = mood_data.emoji
        mood.note = mood_data.note
        mood.mood_score = mood_data.mood_score
        mood.updated_at = utc_now()

        self.session.add(mood)
        self._commit()
        self.session.refresh(mood)
        return mood

    def delete_mood(self, mood_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Delete a mood."""
        mood = self.get_mood_for_user(mood_id, user_id)
        if not mood:
            raise MoodEntryNotFoundError("Mood entry not found")

        self.session.delete(mood)
        self._commit()
        log_info(f"Mood deleted for user {user_id}: {mood_id}")
        return True

    def get_mood_statistics(self, user_id: uuid.UUID) -> MoodStatisticsResponse:
        """Counts and average score per mood kind, plus the overall average."""
        rows = self.session.exec(
            select(
                Mood.mood_type,
                func.count(Mood.id).label("entry_count"),
                func.avg(Mood.mood_score).label("avg_score"),
            )
            .where(Mood.user_id == user_id)
            .group_by(Mood.mood_type)
        ).all()

        by_type = {row.mood_type: row for row in rows}
        distribution = [
            MoodTypeStat(
                mood_type=mood,
                count=by_type[mood.value].entry_count,
                avg_score=round(float(by_type[mood.value].avg_score), 2),
            )
            for mood in MOOD_ORDER
            if mood.value in by_type
        ]

        total_entries = sum(row.entry_count for row in rows)
        score_sum = sum(float(row.avg_score) * row.entry_count for row in rows)
        average = round(score_sum / total_entries, 2) if total_entries else 0.0

        return MoodStatisticsResponse(
            mood_distribution=distribution,
            total_entries=total_entries,
            average_mood_score=average,
        )

    def get_weekly_trend(self, user_id: uuid.UUID, today: Optional[date] = None) -> List[DailyMoodAverage]:
        """Average score per day for the trailing week (today inclusive), newest first.

        Days without entries are omitted.
        """
        today = today or local_today(self.tz)
        start_day = today - timedelta(days=WEEK_DAYS - 1)
        # One extra day of slack on the UTC bound; rows are re-bucketed below.
        window_start = datetime.combine(start_day - timedelta(days=1), time.min).replace(tzinfo=timezone.utc)

        moods = self.session.exec(
            select(Mood).where(Mood.user_id == user_id, Mood.created_at >= window_start)
        ).all()

        scores_by_day = {}
        for mood in moods:
            day = entry_day(ensure_utc(mood.created_at), self.tz)
            if start_day <= day <= today:
                scores_by_day.setdefault(day, []).append(mood.mood_score)

        return [
            DailyMoodAverage(
                date=day,
                avg_score=round(sum(scores) / len(scores), 2),
                entries_count=len(scores),
            )
            for day, scores in sorted(scores_by_day.items(), reverse=True)
        ]
