"""SQLite database adapter."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from tabula.core.enums import DatabaseType
from tabula.core.errors import DatabaseConnectionError
from tabula.core.protocols import Connection

from .base import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter.

    Uses the built-in sqlite3 module. Suitable for:
    - Development and testing
    - Single-process applications

    SQLite has no native date type, so ``datetime``/``date`` values are
    stored as ISO-8601 text and parsed back by the row mapper.
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        readonly: bool = False,
        timeout: float = 5.0,
    ):
        super().__init__(DatabaseType.SQLITE)
        self._path = path or ":memory:"
        self._readonly = readonly
        self._timeout = timeout
        self._conn: Any = None

    def connect(self) -> None:
        """Connect to SQLite database."""
        import sqlite3

        path = self._path
        uri = path.startswith("file:") or "?" in path

        try:
            self._conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=uri,
            )
            self._conn.row_factory = sqlite3.Row

            if self._readonly:
                self._conn.execute("PRAGMA query_only = ON")

            self._driver_error = sqlite3.Error
            self._connected = True

        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close SQLite connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def get_connection(self) -> Connection:
        """Get the SQLite connection."""
        if not self._conn:
            self.connect()
        return self._conn

    def _adapt_value(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat(sep=" ")
        if isinstance(value, date):
            return value.isoformat()
        return super()._adapt_value(value)


__all__ = [
    "SQLiteAdapter",
]
