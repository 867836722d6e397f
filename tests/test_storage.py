"""
Tests for cursor persistence: SQLite store and the in-memory double.
"""

import sqlite3
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storage import NO_CURSOR, MemoryCursorStore, SQLiteCursorStore, StorageUnavailable
from storage.db import CURSOR_KEY


@pytest.fixture
def db_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "data" / "test.db"


@pytest.fixture
def tmp_store(db_path):
    store = SQLiteCursorStore(db_path)
    yield store
    store.close()


class TestSQLiteCursorStore:
    def test_empty_store_returns_minus_one(self, tmp_store):
        assert tmp_store.load() == NO_CURSOR

    def test_save_then_load(self, tmp_store):
        assert tmp_store.save(1000) is True
        assert tmp_store.load() == 1000

    def test_zero_is_a_valid_cursor(self, tmp_store):
        assert tmp_store.save(0) is True
        assert tmp_store.load() == 0

    def test_negative_id_is_rejected(self, tmp_store):
        tmp_store.save(42)
        assert tmp_store.save(-1) is False
        assert tmp_store.load() == 42

    def test_save_overwrites(self, tmp_store):
        tmp_store.save(10)
        tmp_store.save(11)
        assert tmp_store.load() == 11

    def test_survives_reopen(self, db_path):
        store = SQLiteCursorStore(db_path)
        store.save(31337)
        store.close()

        reopened = SQLiteCursorStore(db_path)
        assert reopened.load() == 31337
        reopened.close()

    def test_value_stored_as_decimal_string(self, db_path):
        store = SQLiteCursorStore(db_path)
        store.save(2048)
        store.close()

        conn = sqlite3.connect(str(db_path))
        row = conn.execute("SELECT value FROM cursor_state WHERE key = ?", (CURSOR_KEY,)).fetchone()
        conn.close()
        assert row[0] == "2048"

    def test_clear(self, tmp_store):
        tmp_store.save(5)
        tmp_store.clear()
        assert tmp_store.load() == NO_CURSOR

    def test_malformed_value_reads_as_no_cursor(self, tmp_store, db_path):
        conn = sqlite3.connect(str(db_path))
        conn.execute(
            "INSERT INTO cursor_state (key, value) VALUES (?, ?)", (CURSOR_KEY, "not-a-number")
        )
        conn.commit()
        conn.close()
        assert tmp_store.load() == NO_CURSOR

    def test_unopenable_path_is_fatal(self, db_path):
        # A directory where the database file should be
        db_path.mkdir(parents=True)
        with pytest.raises(StorageUnavailable, match="HNPULL_DB_PATH"):
            SQLiteCursorStore(db_path)

    def test_closed_connection_is_fatal_on_load(self, db_path):
        store = SQLiteCursorStore(db_path)
        store.close()
        with pytest.raises(StorageUnavailable):
            store.load()


class TestMemoryCursorStore:
    def test_defaults_to_no_cursor(self):
        assert MemoryCursorStore().load() == NO_CURSOR

    def test_initial_value(self):
        assert MemoryCursorStore(1000).load() == 1000

    def test_rejects_negative(self):
        store = MemoryCursorStore()
        assert store.save(-5) is False
        assert store.writes == []

    def test_records_writes(self):
        store = MemoryCursorStore()
        store.save(0)
        store.save(1)
        assert store.writes == [0, 1]
        assert store.load() == 1
