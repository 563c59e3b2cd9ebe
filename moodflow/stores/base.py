"""
Entry store interface.

An entry store holds one journal's mood entries. Implementations return
entries newest first, but callers computing statistics must not rely on it.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from moodflow.models.enums import MoodType, MOOD_EMOJIS
from moodflow.schemas.mood import MoodEntry


class EntryStore(ABC):
    """Common interface of the local and SQL stores."""

    @abstractmethod
    def load(self) -> None:
        """Read persisted entries into the store."""

    @abstractmethod
    def save(self) -> None:
        """Persist the current entries."""

    @abstractmethod
    def append(self, entry: MoodEntry) -> MoodEntry:
        """Add an entry and return it as stored (with its id)."""

    @abstractmethod
    def list_all(self) -> List[MoodEntry]:
        """All entries, newest first."""

    def recent(self, limit: int = 3) -> List[MoodEntry]:
        return self.list_all()[:limit]


def create_entry(mood: MoodType, note: Optional[str] = None, now: Optional[datetime] = None) -> MoodEntry:
    """Build a new entry stamped ``now`` (local time when omitted)."""
    mood = MoodType(mood)
    return MoodEntry(
        mood=mood,
        emoji=MOOD_EMOJIS[mood],
        note=note,
        timestamp=now or datetime.now().astimezone(),
    )
