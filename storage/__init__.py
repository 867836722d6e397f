from storage.base import NO_CURSOR, CursorStore, StorageUnavailable
from storage.db import SQLiteCursorStore
from storage.memory import MemoryCursorStore

__all__ = [
    "NO_CURSOR",
    "CursorStore",
    "StorageUnavailable",
    "SQLiteCursorStore",
    "MemoryCursorStore",
]
