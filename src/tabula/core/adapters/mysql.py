"""MySQL database adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
MySQL uses **format** (``%s``) placeholder style, and the DDL synthesized
from models is native MySQL.

Install the driver::

    pip install tabula[mysql]

The driver is imported at ``connect()`` time; if it is missing a
:class:`~tabula.core.errors.ConfigError` is raised there.
"""

from __future__ import annotations

from typing import Any

from tabula.core.enums import DatabaseType
from tabula.core.errors import ConfigError, DatabaseConnectionError
from tabula.core.protocols import Connection

from .base import DatabaseAdapter


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB database adapter backed by a connection pool."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 5,
        charset: str = "utf8mb4",
        connect_timeout: int = 10,
    ):
        super().__init__(DatabaseType.MYSQL)
        self._pool_size = pool_size
        self._connect_args = {
            "host": host,
            "port": port,
            "database": database,
            "user": username,
            "password": password,
            "charset": charset,
            "connect_timeout": connect_timeout,
        }
        self._pool: Any = None

    def connect(self) -> None:
        """Connect to MySQL database."""
        try:
            import mysql.connector
            from mysql.connector import pooling
        except ImportError:
            raise ConfigError(
                "mysql-connector-python is required for MySQL. "
                "Install with: pip install tabula[mysql]"
            ) from None

        try:
            self._pool = pooling.MySQLConnectionPool(
                pool_name="tabula_mysql_pool",
                pool_size=self._pool_size,
                **self._connect_args,
                autocommit=False,
            )
            self._driver_error = mysql.connector.Error
            self._connected = True
        except mysql.connector.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to MySQL: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Drop the pool; pooled connections close when released."""
        self._pool = None
        self._connected = False

    def get_connection(self) -> Connection:
        """Get connection from pool."""
        if not self._pool:
            self.connect()
        return self._pool.get_connection()

    def _release(self, conn: Connection) -> None:
        # mysql.connector returns pooled connections on close()
        conn.close()


__all__ = [
    "MySQLAdapter",
]
