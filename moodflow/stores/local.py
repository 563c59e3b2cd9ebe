"""
JSON-file entry store for local mode.

The whole collection lives in one file holding a JSON array of entries. It is
read once by ``load()`` and rewritten in full by ``save()``.
"""
import os
import tempfile
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from moodflow.core.exceptions import StorageError
from moodflow.core.logging_config import log_error, log_info
from moodflow.schemas.mood import MoodEntry
from moodflow.stores.base import EntryStore

_entries_adapter = TypeAdapter(List[MoodEntry])


class LocalEntryStore(EntryStore):
    """Entry store backed by a single JSON blob on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self._entries: List[MoodEntry] = []

    def load(self) -> None:
        if not self.path.exists():
            self._entries = []
            return
        try:
            raw = self.path.read_bytes()
            self._entries = _entries_adapter.validate_json(raw) if raw.strip() else []
        except (OSError, ValidationError) as exc:
            log_error(exc, path=str(self.path))
            raise StorageError(f"Could not read mood data from {self.path}") from exc

    def save(self) -> None:
        """Rewrite the blob atomically."""
        payload = _entries_adapter.dump_json(self._entries, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".moodflow-", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            log_error(exc, path=str(self.path))
            raise StorageError(f"Could not write mood data to {self.path}") from exc
        log_info(f"Saved {len(self._entries)} entries to {self.path}")

    def append(self, entry: MoodEntry) -> MoodEntry:
        self._entries.insert(0, entry)
        return entry

    def list_all(self) -> List[MoodEntry]:
        return list(self._entries)
