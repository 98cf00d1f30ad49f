"""Database adapter base class.

All adapters share lifecycle (connect/disconnect), statement execution
through DB-API cursors, and dialect management. The base class implements
the :class:`~tabula.core.protocols.Database` handle on top of three
abstract hooks: ``connect()``, ``disconnect()`` and ``get_connection()``.

Features:
    - ``create_table()`` renders DDL through the adapter's dialect
    - ``execute()`` / ``query()`` / ``insert()`` with driver errors wrapped
      in :class:`~tabula.core.errors.QueryError`
    - Each write statement commits on success and rolls back on failure
    - Context-manager protocol for connection lifecycle

Tags:
    database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from tabula.core.dialect import Dialect, get_dialect
from tabula.core.enums import DatabaseType
from tabula.core.errors import QueryError
from tabula.core.logging import get_logger
from tabula.core.protocols import Connection

logger = get_logger(__name__)


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Provides common functionality and defines the interface
    that all adapters must implement.
    """

    def __init__(self, db_type: DatabaseType):
        self._db_type = db_type
        self._connected = False
        self._dialect: Dialect = get_dialect(db_type)
        # Narrowed to the driver's base error class in connect()
        self._driver_error: type[Exception] = Exception

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._db_type

    @property
    def is_connected(self) -> bool:
        """Whether adapter is connected."""
        return self._connected

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def get_connection(self) -> Connection:
        """Get a connection (may be from pool)."""
        ...

    def _release(self, conn: Connection) -> None:
        """Hand a connection back after a statement (pooled adapters)."""

    def _adapt_value(self, value: Any) -> Any:
        """Convert a row value into something the driver binds."""
        if isinstance(value, bool):
            return int(value)
        return value

    def _run(
        self,
        sql: str,
        params: tuple = (),
        *,
        fetch: str | None = None,
    ) -> tuple[Any, Any]:
        """Execute one statement and return ``(cursor, fetched)``.

        ``fetch`` is ``"all"``, ``"one"`` or ``None``. The statement is
        committed before returning; on a driver error it is rolled back and
        re-raised as :class:`QueryError`.
        """
        params = tuple(self._adapt_value(p) for p in params)
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            if fetch == "all":
                fetched = cursor.fetchall()
            elif fetch == "one":
                fetched = cursor.fetchone()
            else:
                fetched = None
            conn.commit()
            return cursor, fetched
        except self._driver_error as e:
            conn.rollback()
            logger.warning("statement_failed", sql=sql, error=str(e))
            raise QueryError(f"Statement failed: {e}", cause=e).with_context(sql=sql) from e
        finally:
            self._release(conn)

    def create_table(self, name: str, columns: Mapping[str, str]) -> None:
        """Create ``name`` with the given column name → type pairs, in order."""
        sql = self._dialect.create_table(name, columns)
        self._run(sql)
        logger.info("table_created", table=name, columns=len(columns), dialect=self._dialect.name)

    def execute(self, sql: str, params: tuple = ()) -> int:
        """Execute a statement and return the affected row count."""
        cursor, _ = self._run(sql, params)
        return cursor.rowcount

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        cursor, rows = self._run(sql, params, fetch="all")
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row, strict=False)) for row in rows]

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute query and return single result."""
        results = self.query(sql, params)
        return results[0] if results else None

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        key: str | None = None,
    ) -> int | None:
        """Insert a single row and return the generated key.

        The key comes from ``cursor.lastrowid``; it is ``None`` when ``key``
        is not given or the driver reports none.
        """
        sql = self._dialect.insert(table, list(data.keys()))
        cursor, _ = self._run(sql, tuple(data.values()))
        if key is None:
            return None
        return cursor.lastrowid or None

    def __enter__(self) -> DatabaseAdapter:
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "DatabaseAdapter",
]
