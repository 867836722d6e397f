"""
Cursor store interface. One durable integer: the last processed item ID.
"""

from abc import ABC, abstractmethod

NO_CURSOR = -1


class StorageUnavailable(Exception):
    """The cursor can't be read or written. Fatal: never fall back to -1."""


class CursorStore(ABC):
    """
    Contract:
    - load() returns the saved cursor, or -1 when nothing was saved yet.
    - load() raises StorageUnavailable if the backing store can't be accessed.
    - save() ignores negative IDs (returns False). 0 is a valid cursor.
    """

    @abstractmethod
    def load(self) -> int:
        ...

    @abstractmethod
    def save(self, item_id: int) -> bool:
        ...

    @abstractmethod
    def clear(self):
        ...

    def close(self):
        pass


def is_valid_cursor(item_id) -> bool:
    return isinstance(item_id, int) and not isinstance(item_id, bool) and item_id >= 0
