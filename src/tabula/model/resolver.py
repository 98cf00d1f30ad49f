"""Metadata resolver: which fields of a model are columns, and how.

Resolution reads the dataclass fields declared directly on the model class,
keeps those carrying :class:`~tabula.model.columns.Column` metadata, and
pairs each with its unwrapped annotation. Declaration order is the column
order used for ``CREATE TABLE``.

Results are cached per model class. Resolution is deterministic, so two
threads racing to populate the cache compute the same tuple.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Union

from tabula.core.errors import ModelError
from tabula.model.columns import COLUMN, IDENTITY, Column


@dataclass(frozen=True)
class ResolvedColumn:
    """A persisted field together with its column metadata.

    Attributes:
        owner: Name of the model class declaring the field
        field_name: Attribute name on the model
        column: Declared column metadata
        python_type: Annotation with ``Optional``/``Annotated`` removed
        identity: Whether the field is the auto-generated primary key
    """

    owner: str
    field_name: str
    column: Column
    python_type: Any
    identity: bool = False

    @property
    def name(self) -> str:
        """Column name: the declared override, else the field name."""
        return self.column.name or self.field_name


def _unwrap(hint: Any) -> Any:
    """Strip ``Annotated[...]`` and ``X | None`` down to ``X``."""
    origin = typing.get_origin(hint)
    if origin is Annotated:
        return _unwrap(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return hint


def _scan(model: type) -> tuple[ResolvedColumn, ...]:
    if not isinstance(model, type) or not dataclasses.is_dataclass(model):
        name = getattr(model, "__name__", type(model).__name__)
        raise ModelError(f"{name} is not a dataclass model", model=name)

    try:
        hints = typing.get_type_hints(model, include_extras=True)
    except (NameError, TypeError) as e:
        raise ModelError(
            f"Couldn't resolve annotations of {model.__name__}: {e}",
            model=model.__name__,
            cause=e,
        ) from e

    own = inspect.get_annotations(model)
    resolved = []
    for f in dataclasses.fields(model):
        meta = f.metadata.get(COLUMN)
        if meta is None or f.name not in own:
            continue
        resolved.append(
            ResolvedColumn(
                owner=model.__name__,
                field_name=f.name,
                column=meta,
                python_type=_unwrap(hints.get(f.name, f.type)),
                identity=bool(f.metadata.get(IDENTITY, False)),
            )
        )
    return tuple(resolved)


@lru_cache(maxsize=None)
def resolve_columns(model: type) -> tuple[ResolvedColumn, ...]:
    """Ordered persisted columns of ``model``.

    Raises:
        ModelError: ``model`` is not a dataclass, its annotations can't be
            resolved, or it declares more than one identity field.
    """
    columns = _scan(model)
    identities = [c.field_name for c in columns if c.identity]
    if len(identities) > 1:
        raise ModelError(
            f"{model.__name__} declares more than one identity field: {', '.join(identities)}",
            model=model.__name__,
            field=identities[1],
        )
    return columns


def resolve_identity(model: type, *, strict: bool = True) -> ResolvedColumn | None:
    """The identity column of ``model``, or ``None``.

    With ``strict=False`` the first identity field wins and ambiguity is not
    checked.
    """
    columns = resolve_columns(model) if strict else _scan(model)
    for col in columns:
        if col.identity:
            return col
    return None


def column_names(model: type) -> list[str]:
    """All column names of ``model`` in declaration order, identity included."""
    return [c.name for c in resolve_columns(model)]


__all__ = [
    "ResolvedColumn",
    "resolve_columns",
    "resolve_identity",
    "column_names",
]
