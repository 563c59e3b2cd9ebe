"""
Relational entry store: one user's rows in the ``moods`` table.
"""
import uuid
from typing import List

from sqlmodel import Session

from moodflow.core.time_utils import ensure_utc
from moodflow.models.enums import MOOD_SCORES, MoodType
from moodflow.models.mood import Mood
from moodflow.schemas.mood import MoodCreate, MoodEntry
from moodflow.services.mood_service import MoodService
from moodflow.stores.base import EntryStore


def to_entry(mood: Mood) -> MoodEntry:
    return MoodEntry(
        id=mood.id,
        mood=MoodType(mood.mood_type),
        emoji=mood.emoji,
        note=mood.note,
        timestamp=ensure_utc(mood.created_at),
    )


class SqlEntryStore(EntryStore):
    """Entry store over ``MoodService``.

    Every append commits, so ``load`` and ``save`` have nothing to do.
    """

    def __init__(self, session: Session, user_id: uuid.UUID):
        self.service = MoodService(session)
        self.user_id = user_id

    def load(self) -> None:
        pass

    def save(self) -> None:
        pass

    def append(self, entry: MoodEntry) -> MoodEntry:
        # The row gets its own id and creation time.
        mood = self.service.create_mood(MoodCreate(
            user_id=self.user_id,
            mood_type=entry.mood,
            emoji=entry.emoji,
            note=entry.note,
            mood_score=MOOD_SCORES[entry.mood],
        ))
        return to_entry(mood)

    def list_all(self) -> List[MoodEntry]:
        return [to_entry(mood) for mood in self.service.get_all_user_moods(self.user_id)]
