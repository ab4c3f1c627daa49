"""Key/value persistence for PropJournal.

The journal keeps a handful of independent snapshots (the entry collection,
the last coach analysis, the goal-celebration flag), each stored whole under a
fixed key. Writes always replace the previous value.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class BaseStore(ABC):
    """Abstract scoped key/value store.

    Implementations must survive process restarts. There are no
    transactional guarantees between keys.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Load the value stored under a key.

        Returns:
            Stored text, or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Replace the value stored under a key.

        Returns:
            True if the write succeeded, False otherwise.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Delete a key. Removing an absent key is not an error.

        Returns:
            True if the delete succeeded, False otherwise.
        """
        pass


class DataStore(BaseStore):
    """SQLite-based key/value store.

    A journal file that SQLite cannot read is moved aside to
    ``<name>.corrupt`` and replaced by a fresh, empty database.
    """

    REQUIRED_TABLES = ["kv"]

    def __init__(self, db_path: Path, scope: str = "default"):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
            scope: Namespace for keys, so several journals can share a file.
        """
        self.db_path = db_path
        self.scope = scope
        self._ensure_db_dir()
        self._init_schema()

    @property
    def corrupt_path(self) -> Path:
        return self.db_path.with_name(self.db_path.name + ".corrupt")

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        try:
            self._create_tables()
        except sqlite3.OperationalError:
            raise
        except sqlite3.DatabaseError as e:
            logger.warning(
                "Journal database %s is unreadable (%s); moving it to %s",
                self.db_path, e, self.corrupt_path,
            )
            self.db_path.replace(self.corrupt_path)
            self._create_tables()

    def _create_tables(self) -> None:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    scope TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (scope, key)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        conn = None
        try:
            conn = self._get_connection()
            cursor = conn.cursor()
            cursor.execute(
                "SELECT value FROM kv WHERE scope = ? AND key = ?",
                (self.scope, key),
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        except sqlite3.Error as e:
            logger.error("Failed to load '%s' from %s: %s", key, self.db_path, e)
            return None
        finally:
            if conn is not None:
                conn.close()

    def set(self, key: str, value: str) -> bool:
        conn = None
        try:
            conn = self._get_connection()
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (scope, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (self.scope, key, value, datetime.now().isoformat()),
            )
            conn.commit()
            return True
        except sqlite3.Error as e:
            logger.error("Failed to save '%s' to %s: %s", key, self.db_path, e)
            return False
        finally:
            if conn is not None:
                conn.close()

    def remove(self, key: str) -> bool:
        conn = None
        try:
            conn = self._get_connection()
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM kv WHERE scope = ? AND key = ?",
                (self.scope, key),
            )
            conn.commit()
            return True
        except sqlite3.Error as e:
            logger.error("Failed to remove '%s' from %s: %s", key, self.db_path, e)
            return False
        finally:
            if conn is not None:
                conn.close()
