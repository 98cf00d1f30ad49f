"""Schema/row mapper.

Turns resolved model metadata into SQL column types, model instances into
rows for writing, and rows back into model instances.

Architecture::

    resolve_columns(Model)
        │
        ├── synthesize_column_type ──► "VARCHAR(50) NOT NULL UNIQUE"
        ├── build_create_table_spec ─► {"id": "INT AUTO_INCREMENT ...", "name": ...}
        ├── to_row(instance) ────────► {"name": "Ann", "active": True}   (no identity)
        ├── from_row(Model, row) ────► Model(id=7, name="Ann", active=True)
        └── apply_generated_key ─────► instance.id = 42

Type mapping::

    str        VARCHAR(n) / TEXT        bool       TINYINT
    int        INT                      datetime   DATETIME
    float      DOUBLE                   date       DATETIME
    Single     FLOAT

Constraint tokens follow the type in a fixed order:
``AUTO_INCREMENT NOT NULL PRIMARY KEY UNIQUE DEFAULT <literal>``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, TypeVar

from tabula.core.errors import InstantiationError, MappingError, UnsupportedTypeError
from tabula.core.logging import get_logger
from tabula.model.columns import Row, RowValue, Single
from tabula.model.resolver import ResolvedColumn, resolve_columns, resolve_identity

logger = get_logger(__name__)

M = TypeVar("M")

DEFAULT_VARCHAR_LENGTH = 255

_SQL_TYPES: dict[Any, str] = {
    int: "INT",
    float: "DOUBLE",
    Single: "FLOAT",
    bool: "TINYINT",
    datetime: "DATETIME",
    date: "DATETIME",
}

_INTEGER = re.compile(r"[+-]?\d+")


# =============================================================================
# Schema synthesis
# =============================================================================


def _render_default(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if _INTEGER.fullmatch(text):
        return str(int(text))
    return "'" + text.replace("'", "''") + "'"


def _column_modifiers(col: ResolvedColumn) -> list[str]:
    meta = col.column
    sql = []
    if col.identity:
        sql.append("AUTO_INCREMENT")
    if not meta.nullable or col.identity:
        sql.append("NOT NULL")
    if meta.primary_key or col.identity:
        sql.append("PRIMARY KEY")
    if meta.unique:
        sql.append("UNIQUE")
    if meta.server_default is not None:
        sql.append(f"DEFAULT {_render_default(meta.server_default)}")
    return sql


def synthesize_column_type(col: ResolvedColumn) -> str:
    """SQL type plus constraint tokens for one column.

    An explicit ``sql_type`` is returned verbatim.

    Raises:
        UnsupportedTypeError: the field's type has no SQL mapping.
    """
    meta = col.column
    if meta.sql_type:
        return meta.sql_type

    kind = col.python_type
    if kind is str:
        if meta.text:
            sql_type = "TEXT"
        else:
            length = DEFAULT_VARCHAR_LENGTH if meta.length < 0 else meta.length
            sql_type = f"VARCHAR({length})"
    elif kind in _SQL_TYPES:
        sql_type = _SQL_TYPES[kind]
    else:
        raise UnsupportedTypeError(col.owner, col.field_name, kind)

    return " ".join([sql_type, *_column_modifiers(col)])


def build_create_table_spec(model: type) -> dict[str, str]:
    """Ordered column name → type string mapping for ``CREATE TABLE``.

    Either every column is synthesized or the error of the first unsupported
    one propagates; no partial mapping is returned.
    """
    spec = {col.name: synthesize_column_type(col) for col in resolve_columns(model)}
    logger.debug("create_table_spec_built", model=model.__name__, columns=len(spec))
    return spec


# =============================================================================
# Marshalling
# =============================================================================


def to_row(instance: Any) -> Row:
    """Column → value row for writing ``instance``; the identity field is left out."""
    model = type(instance)
    row: Row = {}
    for col in resolve_columns(model):
        if col.identity:
            continue
        try:
            row[col.name] = getattr(instance, col.field_name)
        except AttributeError as e:
            raise MappingError(
                f"Couldn't read {model.__name__}.{col.field_name}: {e}",
                model=model.__name__,
                field=col.field_name,
                cause=e,
            ) from e
    return row


def _coerce_bool(value: RowValue) -> bool:
    # 1 and True compare equal; 1.0 and "1" are not accepted
    return (isinstance(value, int) and value == 1) or value == "true"


def _coerce_temporal(col: ResolvedColumn, value: RowValue) -> RowValue:
    kind = col.python_type
    if kind is datetime and isinstance(value, str):
        return datetime.fromisoformat(value)
    if kind is date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return date.fromisoformat(value[:10])
    return value


def from_row(model: type[M], row: Row) -> M:
    """Materialize a new ``model`` instance from ``row``.

    Columns missing from the row, and ``None`` values of non-boolean
    columns, keep the model's default. Boolean columns are ``True`` only
    for ``1``/``True`` or ``"true"``; any other value, ``None`` included,
    gives ``False``.

    Raises:
        InstantiationError: ``model()`` can't be called without arguments.
        MappingError: a value can't be converted or assigned.
    """
    try:
        instance = model()
    except Exception as e:
        raise InstantiationError(model.__name__, cause=e) from e

    for col in resolve_columns(model):
        if col.name not in row:
            continue
        value = row[col.name]

        if col.python_type is bool:
            value = _coerce_bool(value)
        elif value is None:
            continue

        try:
            value = _coerce_temporal(col, value)
            setattr(instance, col.field_name, value)
        except (AttributeError, TypeError, ValueError) as e:
            raise MappingError(
                f"Couldn't assign {value!r} to {model.__name__}.{col.field_name}: {e}",
                model=model.__name__,
                field=col.field_name,
                value=value,
                cause=e,
            ).with_context(column=col.name) from e
    return instance


def apply_generated_key(instance: M, generated_key: int | None) -> M:
    """Store ``generated_key`` on the identity field of ``instance``.

    A no-op when there is no key or the model has no identity field.
    Returns the same instance.
    """
    if generated_key is None:
        return instance
    model = type(instance)
    col = resolve_identity(model)
    if col is None:
        return instance
    try:
        setattr(instance, col.field_name, generated_key)
    except AttributeError as e:
        raise MappingError(
            f"Couldn't assign generated key to {model.__name__}.{col.field_name}: {e}",
            model=model.__name__,
            field=col.field_name,
            value=generated_key,
            cause=e,
        ) from e
    logger.debug("generated_key_applied", model=model.__name__, key=generated_key)
    return instance


__all__ = [
    "DEFAULT_VARCHAR_LENGTH",
    "synthesize_column_type",
    "build_create_table_spec",
    "to_row",
    "from_row",
    "apply_generated_key",
]
