"""PostgreSQL database adapter.

Uses psycopg2 with a threaded connection pool. Generated keys come back
through ``INSERT ... RETURNING`` because psycopg2 cursors do not report
``lastrowid`` for tables with OIDs disabled.

Install the driver::

    pip install tabula[postgresql]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tabula.core.enums import DatabaseType
from tabula.core.errors import ConfigError, DatabaseConnectionError
from tabula.core.protocols import Connection

from .base import DatabaseAdapter


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 5,
        connect_timeout: int = 10,
    ):
        super().__init__(DatabaseType.POSTGRESQL)
        self._pool_size = pool_size
        self._connect_args = {
            "host": host,
            "port": port,
            "database": database,
            "user": username,
            "password": password,
            "connect_timeout": connect_timeout,
        }
        self._pool: Any = None

    def connect(self) -> None:
        """Connect to PostgreSQL database."""
        try:
            import psycopg2
            import psycopg2.pool
        except ImportError:
            raise ConfigError(
                "psycopg2 is required for PostgreSQL. Install with: pip install tabula[postgresql]"
            ) from None

        try:
            self._pool = psycopg2.pool.ThreadedConnectionPool(
                minconn=1,
                maxconn=self._pool_size,
                **self._connect_args,
            )
            self._driver_error = psycopg2.Error
            self._connected = True
        except psycopg2.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to PostgreSQL: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close PostgreSQL connection pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
            self._connected = False

    def get_connection(self) -> Connection:
        """Get connection from pool."""
        if not self._pool:
            self.connect()
        return self._pool.getconn()

    def _release(self, conn: Connection) -> None:
        if self._pool:
            self._pool.putconn(conn)

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        key: str | None = None,
    ) -> int | None:
        """Insert a single row, reading the generated key via ``RETURNING``."""
        sql = self._dialect.insert(table, list(data.keys()))
        if key is None:
            self._run(sql, tuple(data.values()))
            return None
        sql += f" RETURNING {self._dialect.quote_identifier(key)}"
        _, row = self._run(sql, tuple(data.values()), fetch="one")
        return row[0] if row else None


__all__ = [
    "PostgreSQLAdapter",
]
