"""
SQLite key-value storage backend.

A single ``kv_store`` table, one row per key. Useful when the data directory
lives somewhere that prefers one file over many.

Each operation opens its own connection, so the backend can be shared by a
long-lived store whose calls arrive on different threads (Streamlit runs
every rerun on a fresh script thread).
"""

import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from src.services.storage.interface import KeyValueStorageInterface, StorageError


def _connect(db_path: Path) -> sqlite3.Connection:
    """Open a connection in WAL mode."""
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode = WAL")
    return conn


class SqliteStorage(KeyValueStorageInterface):
    """SQLite-backed key-value storage."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._closed = False
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_schema()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open SQLite database {self.db_path}: {e}")

    def _init_schema(self):
        """Create the table if it doesn't exist."""
        with closing(_connect(self.db_path)) as conn, conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def _connection(self) -> sqlite3.Connection:
        if self._closed:
            raise StorageError(f"SQLite storage {self.db_path} is closed")
        return _connect(self.db_path)

    def get_item(self, key: str) -> Optional[str]:
        try:
            with closing(self._connection()) as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?",
                    (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key}: {e}")
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with closing(self._connection()) as conn, conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, value, datetime.now(timezone.utc).isoformat())
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {key}: {e}")

    def remove_item(self, key: str) -> bool:
        try:
            with closing(self._connection()) as conn, conn:
                cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                removed = cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove {key}: {e}")
        return removed

    def close(self) -> None:
        """Refuse further operations. Connections are already closed per call."""
        self._closed = True
