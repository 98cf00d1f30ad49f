"""
Protocol definitions for the database side of tabula.

The mapping engine never imports a driver. It talks to a :class:`Database`
handle, and database adapters talk to driver connections through the
DB-API shaped :class:`Connection` protocol.

Architecture:
    ::

        protocols.py
        ├── Connection   — DB-API 2.0 connection (sqlite3, psycopg2, mysql.connector)
        └── Database     — handle consumed by Table and the query builders

    Consumers:
        core/adapters/base.py, model/table.py, model/query.py

Tags:
    protocol, connection, database, contracts
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tabula.core.dialect import Dialect


@runtime_checkable
class Connection(Protocol):
    """
    Minimal DB-API 2.0 connection interface.

    ``sqlite3.Connection``, psycopg2 connections and ``mysql.connector``
    connections all satisfy it. Statements always run through a cursor so
    the same adapter code works for every driver.
    """

    def cursor(self) -> Any:
        """Open a new cursor."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...


@runtime_checkable
class Database(Protocol):
    """
    Database handle used by table bindings.

    ``create_table`` is the only method the mapping engine itself calls; the
    query builders use ``query``, ``execute`` and ``insert``.

    Examples:
        >>> db.create_table("accounts", {"id": "INT AUTO_INCREMENT NOT NULL PRIMARY KEY"})
        >>> key = db.insert("accounts", {"name": "Ann"}, key="id")
        >>> db.query("SELECT name FROM accounts WHERE id = ?", (key,))
        [{'name': 'Ann'}]
    """

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this database."""
        ...

    def create_table(self, name: str, columns: Mapping[str, str]) -> None:
        """Issue ``CREATE TABLE`` with the column name → type pairs, in order."""
        ...

    def execute(self, sql: str, params: tuple = ()) -> int:
        """Execute a statement and return the affected row count."""
        ...

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a SELECT and return rows as dicts."""
        ...

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        key: str | None = None,
    ) -> int | None:
        """Insert one row and return the generated key, if any."""
        ...


__all__ = [
    "Connection",
    "Database",
]
