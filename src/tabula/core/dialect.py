"""SQL dialect abstraction for database-agnostic table bindings.

The schema synthesized from a model is MySQL flavoured
(``INT AUTO_INCREMENT``, ``TINYINT``, ``DATETIME``). A ``Dialect`` turns
those column type strings into something its backend accepts, and renders
the few SQL fragments the table binding and query builders need
(placeholders, identifier quoting, ``CREATE TABLE`` and ``INSERT``).

Architecture::

    Model ──► build_create_table_spec ──► {"id": "INT AUTO_INCREMENT NOT NULL PRIMARY KEY"}
                                                   │
                                                   ▼
    ┌──────────────────────┐ ┌──────────────────────┐ ┌──────────────────────────────┐
    │ MySQL                │ │ PostgreSQL           │ │ SQLite                       │
    │ %s  `name`           │ │ %s  "name"           │ │ ?  "name"                    │
    │ type spec unchanged  │ │ SERIAL, TIMESTAMP,   │ │ INTEGER ... PRIMARY KEY      │
    │                      │ │ DOUBLE PRECISION     │ │ AUTOINCREMENT                │
    └──────────────────────┘ └──────────────────────┘ └──────────────────────────────┘

Examples:
    >>> from tabula.core.dialect import get_dialect
    >>> d = get_dialect("sqlite")
    >>> d.placeholders(3)
    '?, ?, ?'
    >>> d.column_type("INT AUTO_INCREMENT NOT NULL PRIMARY KEY")
    'INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT'

Tags:
    dialect, sql, abstraction, portability, database
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from tabula.core.enums import DatabaseType, normalize_db_type
from tabula.core.errors import ConfigError

_AUTO_INCREMENT = re.compile(r"\s*\bAUTO_INCREMENT\b")
_DEFAULT = re.compile(r"\s+DEFAULT\s")


def _split_default(type_spec: str) -> tuple[str, str]:
    """Split ``type_spec`` into the type and constraint head and the ``DEFAULT`` tail.

    Rewrites apply to the head only; the tail may hold a quoted literal.
    """
    match = _DEFAULT.search(type_spec)
    if match is None:
        return type_spec, ""
    return type_spec[: match.start()], type_spec[match.start() :]


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a SQL fragment or statement valid for the target
    database.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index)."""
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list."""
        ...

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name."""
        ...

    def column_type(self, type_spec: str) -> str:
        """Translate a synthesized column type string for this backend."""
        ...

    def create_table(self, table: str, columns: Mapping[str, str]) -> str:
        """``CREATE TABLE IF NOT EXISTS`` statement for the given columns."""
        ...

    def insert(self, table: str, columns: Sequence[str]) -> str:
        """Parameterized ``INSERT`` statement."""
        ...


class _BaseDialect:
    """Shared statement rendering; subclasses supply the fragments."""

    _quote = '"'

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join(self.placeholder(i) for i in range(count))

    def quote_identifier(self, name: str) -> str:
        q = self._quote
        return f"{q}{name.replace(q, q + q)}{q}"

    def column_type(self, type_spec: str) -> str:
        return type_spec

    def create_table(self, table: str, columns: Mapping[str, str]) -> str:
        definitions = ", ".join(
            f"{self.quote_identifier(name)} {self.column_type(spec)}"
            for name, spec in columns.items()
        )
        return f"CREATE TABLE IF NOT EXISTS {self.quote_identifier(table)} ({definitions})"

    def insert(self, table: str, columns: Sequence[str]) -> str:
        if not columns:
            return f"INSERT INTO {self.quote_identifier(table)} DEFAULT VALUES"
        cols = ", ".join(self.quote_identifier(c) for c in columns)
        ph = self.placeholders(len(columns))
        return f"INSERT INTO {self.quote_identifier(table)} ({cols}) VALUES ({ph})"


class SQLiteDialect(_BaseDialect):
    """SQLite dialect: ``?`` placeholders, rowid-backed identity columns.

    An ``INT AUTO_INCREMENT`` identity column becomes an ``INTEGER PRIMARY
    KEY AUTOINCREMENT`` column so SQLite aliases it to the rowid and
    generates keys for it.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def column_type(self, type_spec: str) -> str:
        head, default = _split_default(type_spec)
        if not _AUTO_INCREMENT.search(head):
            return type_spec
        head = _AUTO_INCREMENT.sub("", head)
        if re.match(r"INT\b", head):
            head = re.sub(r"^INT\b", "INTEGER", head)
            head = head.replace("PRIMARY KEY", "PRIMARY KEY AUTOINCREMENT", 1)
        return head + default


class MySQLDialect(_BaseDialect):
    """MySQL dialect: ``%s`` placeholders, backtick quoting.

    The synthesized column types are already MySQL syntax.
    """

    _quote = "`"

    @property
    def name(self) -> str:
        return "mysql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def insert(self, table: str, columns: Sequence[str]) -> str:
        if not columns:
            return f"INSERT INTO {self.quote_identifier(table)} () VALUES ()"
        return super().insert(table, columns)


class PostgreSQLDialect(_BaseDialect):
    """PostgreSQL dialect: ``%s`` placeholders (psycopg2), ``SERIAL`` identity."""

    _TYPE_MAP = (
        (re.compile(r"^INT AUTO_INCREMENT\b"), "SERIAL"),
        (re.compile(r"^DOUBLE\b(?! PRECISION)"), "DOUBLE PRECISION"),
        (re.compile(r"^TINYINT\b"), "SMALLINT"),
        (re.compile(r"^DATETIME\b"), "TIMESTAMP"),
    )

    @property
    def name(self) -> str:
        return "postgresql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def column_type(self, type_spec: str) -> str:
        head, default = _split_default(type_spec)
        for pattern, replacement in self._TYPE_MAP:
            head = pattern.sub(replacement, head)
        return _AUTO_INCREMENT.sub("", head) + default


# =========================================================================
# Registry / Factory
# =========================================================================

# Pre-instantiated singletons (dialects are stateless)
_DIALECTS: dict[str, Dialect] = {
    DatabaseType.SQLITE.value: SQLiteDialect(),
    DatabaseType.POSTGRESQL.value: PostgreSQLDialect(),
    DatabaseType.MYSQL.value: MySQLDialect(),
}


def get_dialect(db_type: DatabaseType | str) -> Dialect:
    """Get a dialect by database type name.

    Args:
        db_type: One of ``'sqlite'``, ``'postgresql'``, ``'postgres'``,
                 ``'mysql'`` (or a :class:`DatabaseType` member).

    Raises:
        ConfigError: If ``db_type`` is not recognised.
    """
    key = normalize_db_type(db_type)
    if key not in _DIALECTS:
        raise ConfigError(f"Unknown dialect '{db_type}'. Supported: {sorted(_DIALECTS)}")
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (e.g. a test double)."""
    _DIALECTS[normalize_db_type(name)] = dialect


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "get_dialect",
    "register_dialect",
]
