"""
SQLite cursor storage. One file, one connection, no ORM.

Tables:
- cursor_state: key/value pairs; only `last_item_id` is used. The value is
  the decimal string of the last processed item ID.
"""

import logging
import sqlite3
from pathlib import Path

from storage.base import NO_CURSOR, CursorStore, StorageUnavailable, is_valid_cursor

log = logging.getLogger(__name__)

CURSOR_KEY = "last_item_id"


class SQLiteCursorStore(CursorStore):
    def __init__(self, db_path: Path, key: str = CURSOR_KEY):
        self._path = db_path
        self._key = key
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(db_path))
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._migrate()
        except (OSError, sqlite3.Error) as e:
            raise StorageUnavailable(self._explain(e)) from e

    def _migrate(self):
        """Create tables if they don't exist. No migration framework needed."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS cursor_state (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            );
        """)
        self._conn.commit()

    def _explain(self, error: Exception) -> str:
        return (
            f"Cannot access cursor database '{self._path}': {error}. "
            f"hn-pull needs a readable and writable location for it; "
            f"set HNPULL_DB_PATH to a writable file path."
        )

    def load(self) -> int:
        """Last saved item ID, or -1 if none has been saved yet."""
        try:
            row = self._conn.execute(
                "SELECT value FROM cursor_state WHERE key = ?", (self._key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailable(self._explain(e)) from e
        if row is None:
            return NO_CURSOR
        try:
            return int(row[0])
        except ValueError:
            log.warning(f"Ignoring malformed stored cursor: {row[0]!r}")
            return NO_CURSOR

    def save(self, item_id: int) -> bool:
        """
        Persist item_id as the cursor. Returns False (and writes nothing)
        for negative IDs. Upsert, so repeated saves just overwrite.
        """
        if not is_valid_cursor(item_id):
            return False
        try:
            self._conn.execute(
                """INSERT INTO cursor_state (key, value, updated_at)
                   VALUES (?, ?, datetime('now'))
                   ON CONFLICT(key)
                   DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
                (self._key, str(item_id)),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailable(self._explain(e)) from e
        return True

    def clear(self):
        try:
            self._conn.execute("DELETE FROM cursor_state WHERE key = ?", (self._key,))
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailable(self._explain(e)) from e

    def close(self):
        self._conn.close()
