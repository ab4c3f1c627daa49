"""Property-based tests for the key/value store.

**Feature: prop-journal**
"""

import sqlite3
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from propjournal.db.store import DataStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


keys = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="_."),
    min_size=1,
    max_size=30,
)
values = st.text(max_size=500)


class TestDatabaseSchemaCompleteness:
    """
    **Feature: prop-journal, Property 11: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        """Test that all required tables exist in a fresh database."""
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_nested_directory_is_created(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "a" / "b" / "journal.db"
            DataStore(db_path)

            assert db_path.exists()


class TestKeyValueOperations:
    """
    **Feature: prop-journal, Property 12: Full-Replace Key/Value Semantics**

    *For any* key, the last value written is the one read back; after
    removal the key is absent.
    """

    @given(key=keys, value=values)
    @settings(max_examples=50)
    def test_set_get(self, key: str, value: str):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            assert store.set(key, value)
            assert store.get(key) == value

    @given(key=keys, first=values, second=values)
    @settings(max_examples=50)
    def test_last_writer_wins(self, key: str, first: str, second: str):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            store.set(key, first)
            store.set(key, second)

            assert store.get(key) == second

    @given(key=keys, value=values)
    @settings(max_examples=50)
    def test_set_remove(self, key: str, value: str):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            store.set(key, value)
            assert store.remove(key)

            assert store.get(key) is None

    def test_missing_key(self, temp_db: DataStore):
        assert temp_db.get("nothing") is None
        assert temp_db.remove("nothing")

    def test_values_survive_new_instance(self, temp_db: DataStore):
        temp_db.set("celebrated", "true")

        reopened = DataStore(temp_db.db_path)

        assert reopened.get("celebrated") == "true"

    def test_scopes_are_isolated(self, temp_db: DataStore):
        other = DataStore(temp_db.db_path, scope="second-account")

        temp_db.set("trade_journal_entries", "[]")

        assert other.get("trade_journal_entries") is None
        assert temp_db.get("trade_journal_entries") == "[]"


class TestDatabaseFailures:
    """
    **Feature: prop-journal, Property 17: Unreadable Storage Never Crashes**

    *For any* unreadable journal file, the store starts empty and keeps the
    old file aside; failed connections are reported, not raised.
    """

    def test_garbage_file_is_moved_aside(self, tmp_path: Path):
        db_path = tmp_path / "journal.db"
        garbage = b"this is not a sqlite database" * 100
        db_path.write_bytes(garbage)

        store = DataStore(db_path)

        assert store.corrupt_path.read_bytes() == garbage
        assert store.get("trade_journal_entries") is None
        assert store.set("trade_journal_entries", "[]")
        assert DataStore(db_path).get("trade_journal_entries") == "[]"

    def test_connection_failures_return_false(self, temp_db: DataStore, monkeypatch):
        def refuse():
            raise sqlite3.OperationalError("unable to open database file")

        monkeypatch.setattr(temp_db, "_get_connection", refuse)

        assert temp_db.set("celebrated", "true") is False
        assert temp_db.remove("celebrated") is False
        assert temp_db.get("celebrated") is None
