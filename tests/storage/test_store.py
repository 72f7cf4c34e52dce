"""Tests for SQLiteStore."""

from pathlib import Path

import pytest

from stridelog.storage import SQLiteStore


@pytest.fixture
def store(tmp_path: Path) -> SQLiteStore:
    """Create a SQLiteStore with a temporary database."""
    store = SQLiteStore(tmp_path / "test.db")
    store.init_db()
    yield store
    store.close()


class TestSQLiteStoreInit:
    """Tests for SQLiteStore initialization."""

    def test_creates_db_directory(self, tmp_path: Path):
        """Store creates parent directories if they don't exist."""
        nested_path = tmp_path / "nested" / "dir" / "stridelog.db"
        store = SQLiteStore(nested_path)
        store.init_db()
        assert nested_path.exists()
        store.close()

    def test_creates_kv_table(self, store: SQLiteStore):
        """init_db creates the kv table."""
        conn = store._get_connection()
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='kv'"
        )
        assert cursor.fetchone() is not None

    def test_init_db_idempotent(self, store: SQLiteStore):
        """init_db can be called multiple times."""
        store.init_db()
        store.init_db()  # Should not raise


class TestSQLiteStoreItems:
    """Tests for reading and writing values."""

    def test_get_missing_returns_none(self, store: SQLiteStore):
        assert store.get_item("workouts") is None

    def test_set_and_get(self, store: SQLiteStore):
        store.set_item("workouts", "[]")
        assert store.get_item("workouts") == "[]"

    def test_set_overwrites(self, store: SQLiteStore):
        """A second write fully replaces the first."""
        store.set_item("workouts", '[{"a": 1}]')
        store.set_item("workouts", "[]")
        assert store.get_item("workouts") == "[]"

    def test_remove(self, store: SQLiteStore):
        store.set_item("workouts", "[]")
        store.remove_item("workouts")
        assert store.get_item("workouts") is None

    def test_remove_missing(self, store: SQLiteStore):
        """Removing an absent key is a no-op."""
        store.remove_item("nothing")

    def test_keys_are_independent(self, store: SQLiteStore):
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        assert store.get_item("a") is None
        assert store.get_item("b") == "2"


class TestSQLiteStoreLifecycle:
    """Tests for store lifecycle."""

    def test_close_and_reopen(self, tmp_path: Path):
        """Data persists after close and reopen."""
        db_path = tmp_path / "stridelog.db"

        store1 = SQLiteStore(db_path)
        store1.init_db()
        store1.set_item("workouts", "[1, 2]")
        store1.close()

        store2 = SQLiteStore(db_path)
        store2.init_db()
        value = store2.get_item("workouts")
        store2.close()

        assert value == "[1, 2]"

    def test_close_idempotent(self, store: SQLiteStore):
        """close can be called multiple times."""
        store.close()
        store.close()  # Should not raise
