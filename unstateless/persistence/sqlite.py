"""SQLite-backed storage backend."""

import sqlite3
from datetime import datetime
from typing import Dict, Optional

from ..errors import StorageError


class SqliteStorage:
    """Namespace-scoped string storage kept in a SQLite table.

    Values survive across instances opened on the same database file.
    """

    def __init__(self, db_path: str, namespace: str = "default") -> None:
        """Initialize with database path and namespace.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
            namespace: Scope for keys; namespaces never see each other's keys
        """
        self.db_path = db_path
        self.namespace = namespace
        try:
            self.db = sqlite3.connect(db_path)
        except sqlite3.Error as e:
            raise StorageError("connect", cause=e) from e
        self._init_tables()

    def _init_tables(self) -> None:
        """Initialize kv_store table."""
        create_table = """
            CREATE TABLE IF NOT EXISTS kv_store (
                namespace TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (namespace, key)
            )
        """
        with self.db:
            self.db.execute(create_table)

    def _connection(self, operation: str, key: Optional[str] = None) -> sqlite3.Connection:
        if self.db is None:
            raise StorageError(operation, key, sqlite3.ProgrammingError("storage is closed"))
        return self.db

    def get_item(self, key: str) -> Optional[str]:
        """Get raw value for key."""
        db = self._connection("read", key)
        try:
            row = db.execute(
                "SELECT value FROM kv_store WHERE namespace = ? AND key = ?",
                (self.namespace, key)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError("read", key, e) from e
        return None if row is None else row[0]

    def set_item(self, key: str, value: str) -> None:
        """Write raw value for key."""
        db = self._connection("write", key)
        try:
            with db:
                db.execute(
                    """INSERT OR REPLACE INTO kv_store (namespace, key, value, updated_at)
                       VALUES (?, ?, ?, ?)""",
                    (self.namespace, key, value, datetime.now())
                )
        except sqlite3.Error as e:
            raise StorageError("write", key, e) from e

    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        db = self._connection("delete", key)
        try:
            with db:
                db.execute(
                    "DELETE FROM kv_store WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
        except sqlite3.Error as e:
            raise StorageError("delete", key, e) from e

    def clear(self) -> None:
        """Remove every key in this namespace."""
        db = self._connection("clear")
        try:
            with db:
                db.execute("DELETE FROM kv_store WHERE namespace = ?", (self.namespace,))
        except sqlite3.Error as e:
            raise StorageError("clear", cause=e) from e

    def items(self) -> Dict[str, str]:
        """Return all raw values in this namespace."""
        db = self._connection("read")
        try:
            cursor = db.execute(
                "SELECT key, value FROM kv_store WHERE namespace = ? ORDER BY key",
                (self.namespace,)
            )
            return {key: value for key, value in cursor}
        except sqlite3.Error as e:
            raise StorageError("read", cause=e) from e

    def close(self) -> None:
        """Close the database connection."""
        if self.db:
            self.db.close()
            self.db = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
