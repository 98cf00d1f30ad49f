"""
Shared enums for tabula.

``DatabaseType`` names the supported backends. Dialects, adapters and
settings all accept the backend as a string; :func:`normalize_db_type`
maps every accepted spelling (any case, the ``postgres`` alias, or a
``DatabaseType`` member) to one canonical name.

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from enum import Enum


class DatabaseType(str, Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


_ALIASES = {
    "postgres": DatabaseType.POSTGRESQL.value,
}


def normalize_db_type(db_type: DatabaseType | str) -> str:
    """Canonical lower-case backend name for ``db_type``.

    Unknown names are returned lower-cased; callers decide how to reject them.

    Examples:
        >>> normalize_db_type("Postgres")
        'postgresql'
        >>> normalize_db_type(DatabaseType.MYSQL)
        'mysql'
    """
    if isinstance(db_type, DatabaseType):
        return db_type.value
    key = db_type.lower()
    return _ALIASES.get(key, key)


__all__ = [
    "DatabaseType",
    "normalize_db_type",
]
