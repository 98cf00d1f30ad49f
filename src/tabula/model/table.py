"""Table binding: a model class bound to a table name and a database handle.

Usage:
    >>> db = SQLiteAdapter()
    >>> accounts = Table(db, "accounts", Account)
    >>> accounts.create()
    >>> ann = accounts.insert(Account(name="Ann", active=True)).execute()
    >>> ann.id
    1
    >>> accounts.select().where("name", "Ann").first()
    Account(id=1, name='Ann', active=True)
    >>> accounts.update().set("active", False).where("id", 1).execute()
    1
    >>> accounts.delete().where("active", False).execute()
    1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from tabula.core.logging import LogContext
from tabula.core.protocols import Database
from tabula.model import mapper
from tabula.model.columns import Row
from tabula.model.query import ModelDelete, ModelInsert, ModelSelect, ModelUpdate
from tabula.model.resolver import ResolvedColumn, column_names, resolve_identity

M = TypeVar("M")


@dataclass(frozen=True)
class Table(Generic[M]):
    """Immutable association of ``model`` with table ``name`` on ``database``."""

    database: Database
    name: str
    model: type[M]

    # -- Query builders ----------------------------------------------------

    def select(self) -> ModelSelect[M]:
        return ModelSelect(self)

    def insert(self, instance: M) -> ModelInsert[M]:
        return ModelInsert(self, instance)

    def update(self) -> ModelUpdate[M]:
        return ModelUpdate(self)

    def delete(self) -> ModelDelete[M]:
        return ModelDelete(self)

    # -- Schema ------------------------------------------------------------

    def create(self) -> None:
        """Create the table from the model's columns."""
        columns = mapper.build_create_table_spec(self.model)
        with LogContext(table=self.name, model=self.model.__name__):
            self.database.create_table(self.name, columns)

    def columns(self) -> list[str]:
        """Column names in declaration order, identity included."""
        return column_names(self.model)

    def identity(self) -> ResolvedColumn | None:
        return resolve_identity(self.model)

    # -- Row mapping -------------------------------------------------------

    def to_row(self, instance: M) -> Row:
        return mapper.to_row(instance)

    def from_row(self, row: Row) -> M:
        return mapper.from_row(self.model, row)

    def apply_generated_key(self, instance: M, generated_key: int | None) -> M:
        return mapper.apply_generated_key(instance, generated_key)


__all__ = [
    "Table",
]
