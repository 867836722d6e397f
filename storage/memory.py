"""
In-memory cursor store. Nothing survives the process; used by
`watch --ephemeral` and by tests.
"""

from storage.base import NO_CURSOR, CursorStore, is_valid_cursor


class MemoryCursorStore(CursorStore):
    def __init__(self, initial: int = NO_CURSOR):
        self._value = initial if is_valid_cursor(initial) else None
        self.writes: list[int] = []

    def load(self) -> int:
        return NO_CURSOR if self._value is None else self._value

    def save(self, item_id: int) -> bool:
        if not is_valid_cursor(item_id):
            return False
        self._value = item_id
        self.writes.append(item_id)
        return True

    def clear(self):
        self._value = None
