"""Column declarations for dataclass models.

A model is a plain ``@dataclass``. Persisted fields are declared with
:func:`column` (or :func:`identity` for the auto-generated primary key),
which attach a :class:`Column` descriptor to the dataclass field's
``metadata``. Fields declared with a bare default or ``dataclasses.field``
are ignored by the mapper.

Examples:
    >>> from dataclasses import dataclass
    >>> from datetime import datetime
    >>> @dataclass
    ... class Account:
    ...     id: int | None = identity()
    ...     name: str | None = column(length=50, nullable=False)
    ...     bio: str | None = column(text=True)
    ...     active: bool = column(default=False, server_default=1)
    ...     created: datetime | None = column(name="created_at")
    ...     cache: dict | None = None  # not persisted

``default`` / ``default_factory`` are the Python-side initial values, the
same split as SQLAlchemy's ``mapped_column(default=..., server_default=...)``.
Without either, the field starts as ``None``.
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field
from datetime import date, datetime
from typing import Any, NewType

COLUMN = "tabula.column"
IDENTITY = "tabula.identity"

# Single-precision float, synthesized as FLOAT. Plain ``float`` is DOUBLE.
Single = NewType("Single", float)

RowValue = int | float | str | bool | datetime | date | None
Row = dict[str, RowValue]


@dataclass(frozen=True)
class Column:
    """Persistence metadata for one model field.

    Attributes:
        name: Column name; empty means the field name
        sql_type: Explicit SQL type, skipping inference and constraints
        nullable: ``False`` adds ``NOT NULL``
        primary_key: Adds ``PRIMARY KEY``
        unique: Adds ``UNIQUE``
        text: Store strings as ``TEXT`` instead of ``VARCHAR(n)``
        length: ``VARCHAR`` length; negative means 255
        server_default: Literal for the ``DEFAULT`` clause
    """

    name: str = ""
    sql_type: str = ""
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    text: bool = False
    length: int = -1
    server_default: str | int | float | bool | None = None


def _model_field(
    metadata: dict[str, Any],
    default: Any,
    default_factory: Any,
    **kwargs: Any,
) -> Any:
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata, **kwargs)
    return field(default=default, metadata=metadata, **kwargs)


def column(
    *,
    name: str = "",
    sql_type: str = "",
    nullable: bool = True,
    primary_key: bool = False,
    unique: bool = False,
    text: bool = False,
    length: int = -1,
    server_default: str | int | float | bool | None = None,
    default: Any = None,
    default_factory: Any = MISSING,
    init: bool = True,
    repr: bool = True,
    compare: bool = True,
) -> Any:
    """Declare a persisted dataclass field."""
    meta = Column(
        name=name,
        sql_type=sql_type,
        nullable=nullable,
        primary_key=primary_key,
        unique=unique,
        text=text,
        length=length,
        server_default=server_default,
    )
    return _model_field(
        {COLUMN: meta},
        default,
        default_factory,
        init=init,
        repr=repr,
        compare=compare,
    )


def identity(
    *,
    name: str = "",
    sql_type: str = "",
    unique: bool = False,
    server_default: str | int | float | bool | None = None,
    default: Any = None,
    init: bool = True,
    repr: bool = True,
    compare: bool = True,
) -> Any:
    """Declare the auto-incrementing primary key of a model.

    The field is persisted like any other column, is never written by
    inserts and updates, and receives the key generated by the store.
    """
    meta = Column(name=name, sql_type=sql_type, unique=unique, server_default=server_default)
    return _model_field(
        {COLUMN: meta, IDENTITY: True},
        default,
        MISSING,
        init=init,
        repr=repr,
        compare=compare,
    )


__all__ = [
    "COLUMN",
    "IDENTITY",
    "Column",
    "Row",
    "RowValue",
    "Single",
    "column",
    "identity",
]
