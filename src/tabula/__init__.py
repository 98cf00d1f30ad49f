"""tabula - dataclass models bound to relational tables.

Declare a model, bind it to a table, and read and write instances::

    from dataclasses import dataclass

    from tabula import SQLiteAdapter, Table, column, identity

    @dataclass
    class Account:
        id: int | None = identity()
        name: str | None = column(length=50, nullable=False)
        active: bool = column(default=False)

    accounts = Table(SQLiteAdapter(), "accounts", Account)
    accounts.create()
    ann = accounts.insert(Account(name="Ann", active=True)).execute()
"""

from tabula.core.adapters import DatabaseAdapter, SQLiteAdapter, get_adapter
from tabula.core.errors import (
    InstantiationError,
    MappingError,
    ModelError,
    QueryError,
    TabulaError,
    UnsupportedTypeError,
)
from tabula.model import (
    Column,
    Row,
    Single,
    Table,
    apply_generated_key,
    build_create_table_spec,
    column,
    from_row,
    identity,
    resolve_columns,
    resolve_identity,
    synthesize_column_type,
    to_row,
)

__version__ = "0.1.0"

__all__ = [
    "Column",
    "Row",
    "Single",
    "Table",
    "column",
    "identity",
    "resolve_columns",
    "resolve_identity",
    "synthesize_column_type",
    "build_create_table_spec",
    "to_row",
    "from_row",
    "apply_generated_key",
    "DatabaseAdapter",
    "SQLiteAdapter",
    "get_adapter",
    "TabulaError",
    "ModelError",
    "UnsupportedTypeError",
    "InstantiationError",
    "MappingError",
    "QueryError",
]
