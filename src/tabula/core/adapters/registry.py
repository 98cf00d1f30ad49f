"""Adapter lookup by backend name.

``get_adapter()`` turns a backend name (``"sqlite"``, ``"postgresql"`` or
its ``"postgres"`` alias, ``"mysql"``, or a :class:`DatabaseType`) plus the
adapter's keyword arguments into an unconnected adapter.
:func:`tabula.core.settings.connect` builds both from ``TABULA_*`` settings.

Tags:
    database, factory
"""

from __future__ import annotations

from typing import Any

from tabula.core.enums import DatabaseType, normalize_db_type
from tabula.core.errors import ConfigError

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .sqlite import SQLiteAdapter

_ADAPTERS: dict[str, type[DatabaseAdapter]] = {
    DatabaseType.SQLITE.value: SQLiteAdapter,
    DatabaseType.POSTGRESQL.value: PostgreSQLAdapter,
    DatabaseType.MYSQL.value: MySQLAdapter,
}


def get_adapter(db_type: DatabaseType | str, **kwargs: Any) -> DatabaseAdapter:
    """
    Create an adapter for ``db_type``.

    Usage:
        adapter = get_adapter(DatabaseType.SQLITE, path="accounts.db")
        adapter = get_adapter("postgres", host="localhost", database="accounts")

    Raises:
        ConfigError: If ``db_type`` names no known backend.
    """
    name = normalize_db_type(db_type)
    if name not in _ADAPTERS:
        raise ConfigError(f"Unknown database adapter '{db_type}'. Supported: {sorted(_ADAPTERS)}")
    return _ADAPTERS[name](**kwargs)


__all__ = [
    "get_adapter",
]
