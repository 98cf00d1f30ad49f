"""Fluent query builders over a :class:`~tabula.model.table.Table`.

Each builder collects clauses, renders parameterized SQL through the
database's dialect, and executes it on ``execute()``. Column names are
checked against the model; values are always bound parameters.

Grammar::

    select().where(col, value[, op]).order_by(col[, descending]).limit(n)
        .execute() -> list[M] | .first() -> M | None | .count() -> int
    insert(instance).execute() -> M                  (generated key applied)
    update().set(col, value).where(...).execute() -> int
    delete().where(...).execute() -> int

``where`` operators: ``=``, ``!=``, ``<``, ``<=``, ``>``, ``>=``, ``LIKE``.
A ``None`` value with ``=``/``!=`` renders ``IS NULL``/``IS NOT NULL``.
Clauses are AND-ed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from tabula.core.errors import QueryError
from tabula.core.logging import get_logger
from tabula.model.columns import RowValue

if TYPE_CHECKING:
    from tabula.model.table import Table

logger = get_logger(__name__)

M = TypeVar("M")
Q = TypeVar("Q", bound="_ModelQuery")

_OPERATORS = frozenset({"=", "!=", "<", "<=", ">", ">=", "LIKE"})


class _ModelQuery(Generic[M]):
    """Shared WHERE handling."""

    def __init__(self, table: Table[M]):
        self._table = table
        self._wheres: list[tuple[str, str, RowValue]] = []

    @property
    def table(self) -> Table[M]:
        return self._table

    def _quote(self, name: str) -> str:
        return self._table.database.dialect.quote_identifier(name)

    def _check_column(self, column: str) -> str:
        if column not in self._table.columns():
            raise QueryError(
                f"{self._table.model.__name__} has no column {column!r}"
            ).with_context(model=self._table.model.__name__, table=self._table.name, column=column)
        return column

    def where(self: Q, column: str, value: RowValue, op: str = "=") -> Q:
        """Add an ``AND``-ed condition."""
        op = op.upper()
        if op not in _OPERATORS:
            raise QueryError(f"Unsupported operator {op!r}").with_context(column=column)
        self._wheres.append((self._check_column(column), op, value))
        return self

    def _where_sql(self, offset: int = 0) -> tuple[str, tuple]:
        if not self._wheres:
            return "", ()
        dialect = self._table.database.dialect
        clauses = []
        params: list[Any] = []
        for column, op, value in self._wheres:
            if value is None and op in ("=", "!="):
                clauses.append(f"{self._quote(column)} IS {'NOT ' if op == '!=' else ''}NULL")
                continue
            clauses.append(f"{self._quote(column)} {op} {dialect.placeholder(offset + len(params))}")
            params.append(value)
        return " WHERE " + " AND ".join(clauses), tuple(params)


class ModelSelect(_ModelQuery[M]):
    """``SELECT`` returning model instances."""

    def __init__(self, table: Table[M]):
        super().__init__(table)
        self._order: list[tuple[str, bool]] = []
        self._limit: int | None = None

    def order_by(self, column: str, descending: bool = False) -> ModelSelect[M]:
        self._order.append((self._check_column(column), descending))
        return self

    def limit(self, count: int) -> ModelSelect[M]:
        if count < 0:
            raise QueryError(f"Limit must be non-negative, got {count}")
        self._limit = int(count)
        return self

    def to_sql(self) -> tuple[str, tuple]:
        columns = ", ".join(self._quote(c) for c in self._table.columns())
        sql = f"SELECT {columns} FROM {self._quote(self._table.name)}"
        where, params = self._where_sql()
        sql += where
        if self._order:
            sql += " ORDER BY " + ", ".join(
                f"{self._quote(c)}{' DESC' if desc else ''}" for c, desc in self._order
            )
        if self._limit is not None:
            sql += f" LIMIT {self._limit}"
        return sql, params

    def execute(self) -> list[M]:
        sql, params = self.to_sql()
        rows = self._table.database.query(sql, params)
        logger.debug("select_executed", table=self._table.name, rows=len(rows))
        return [self._table.from_row(row) for row in rows]

    def first(self) -> M | None:
        """First matching instance; the builder's own limit is left unchanged."""
        limit, self._limit = self._limit, 1
        try:
            results = self.execute()
        finally:
            self._limit = limit
        return results[0] if results else None

    def count(self) -> int:
        where, params = self._where_sql()
        sql = f"SELECT COUNT(*) AS n FROM {self._quote(self._table.name)}{where}"
        rows = self._table.database.query(sql, params)
        return int(rows[0]["n"]) if rows else 0


class ModelInsert(Generic[M]):
    """``INSERT`` of one instance; the generated key is written back to it."""

    def __init__(self, table: Table[M], instance: M):
        self._table = table
        self._instance = instance

    def execute(self) -> M:
        row = self._table.to_row(self._instance)
        ident = self._table.identity()
        key = self._table.database.insert(
            self._table.name,
            row,
            key=ident.name if ident is not None else None,
        )
        logger.debug("insert_executed", table=self._table.name, key=key)
        return self._table.apply_generated_key(self._instance, key)


class ModelUpdate(_ModelQuery[M]):
    """``UPDATE`` of explicit column values."""

    def __init__(self, table: Table[M]):
        super().__init__(table)
        self._values: dict[str, RowValue] = {}

    def set(self, column: str, value: RowValue) -> ModelUpdate[M]:
        self._values[self._check_column(column)] = value
        return self

    def to_sql(self) -> tuple[str, tuple]:
        if not self._values:
            raise QueryError("Update has no values to set").with_context(table=self._table.name)
        dialect = self._table.database.dialect
        assignments = ", ".join(
            f"{self._quote(c)} = {dialect.placeholder(i)}" for i, c in enumerate(self._values)
        )
        where, params = self._where_sql(offset=len(self._values))
        sql = f"UPDATE {self._quote(self._table.name)} SET {assignments}{where}"
        return sql, tuple(self._values.values()) + params

    def execute(self) -> int:
        sql, params = self.to_sql()
        count = self._table.database.execute(sql, params)
        logger.debug("update_executed", table=self._table.name, rows=count)
        return count


class ModelDelete(_ModelQuery[M]):
    """``DELETE`` of the rows matching the conditions (all rows without any)."""

    def to_sql(self) -> tuple[str, tuple]:
        where, params = self._where_sql()
        return f"DELETE FROM {self._quote(self._table.name)}{where}", params

    def execute(self) -> int:
        sql, params = self.to_sql()
        count = self._table.database.execute(sql, params)
        logger.debug("delete_executed", table=self._table.name, rows=count)
        return count


__all__ = [
    "ModelSelect",
    "ModelInsert",
    "ModelUpdate",
    "ModelDelete",
]
