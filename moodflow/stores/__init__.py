from .base import EntryStore, create_entry
from .local import LocalEntryStore
from .sql import SqlEntryStore

__all__ = ["EntryStore", "LocalEntryStore", "SqlEntryStore", "create_entry"]
