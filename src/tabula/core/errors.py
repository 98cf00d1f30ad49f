"""
Structured error types for tabula.

Every failure raised by the mapping engine or the database layer is a
:class:`TabulaError`. Errors carry a category, a retryable flag, an
:class:`ErrorContext` with the model/field/value that triggered them, and
the chained underlying exception.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       TabulaError                                │
        │  (category, retryable, context, cause)                           │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ModelError              MappingError        ConfigError         │
        │  (MODEL)                 (MAPPING)           (CONFIG)            │
        │       │                                                          │
        │  UnsupportedTypeError                                            │
        │  InstantiationError                                              │
        │                                                                  │
        │  DatabaseError           DatabaseConnectionError                 │
        │  (DATABASE)              (DATABASE, retryable)                   │
        │       │                                                          │
        │  QueryError                                                      │
        └─────────────────────────────────────────────────────────────────┘

Propagation:
    Model and mapping errors are programming errors in a model declaration.
    They are never retryable and are raised straight to the caller (the
    table binding, a query builder, or whoever asked for a schema).

Examples:
    >>> error = UnsupportedTypeError("Account", "tags", list)
    >>> error.context.model
    'Account'
    >>> error.to_dict()["category"]
    'MODEL'

    Chaining an attribute failure:

    >>> try:
    ...     raise AttributeError("balance")
    ... except AttributeError as e:
    ...     error = MappingError("read failed", model="Account", field="balance", cause=e)
    >>> error.cause
    AttributeError('balance')

Tags:
    error-handling, exception-hierarchy, error-context, tabula
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    # Declaration errors (never retryable)
    MODEL = "MODEL"               # Bad model declaration, unsupported type
    MAPPING = "MAPPING"           # Attribute read/write during marshalling
    CONFIG = "CONFIG"             # Missing config, invalid settings

    # Infrastructure errors
    DATABASE = "DATABASE"         # Connection, query, driver

    # Internal errors
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what a misannotated model needs for diagnosis (model,
    field, offending type or value); anything else goes to ``metadata``.
    ``to_dict()`` serializes only the fields that are set.

    Attributes:
        model: Name of the model class involved
        field: Name of the model field involved
        column: Column name involved
        table: Table name involved
        sql: SQL statement that failed
        metadata: Additional key-value pairs
    """

    model: str | None = None
    field: str | None = None
    column: str | None = None
    table: str | None = None
    sql: str | None = None

    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["model", "field", "column", "table", "sql"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TabulaError(Exception):
    """
    Base exception for all tabula errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    only pass the message and whatever context they have.

    Examples:
        >>> error = TabulaError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(model="Account").context.model
        'Account'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TabulaError:
        """
        Add context to this error (fluent API).

        Usage:
            raise QueryError("Insert failed").with_context(
                table="accounts",
                sql="INSERT INTO accounts ...",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# MODEL ERRORS
# =============================================================================


class ModelError(TabulaError):
    """
    A model declaration violates an invariant.

    Raised while resolving metadata, e.g. when a class is not a dataclass or
    declares more than one identity field.
    """

    default_category = ErrorCategory.MODEL
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        field: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if model is not None:
            self.context.model = model
        if field is not None:
            self.context.field = field


class UnsupportedTypeError(ModelError):
    """A model field's type has no SQL column type."""

    def __init__(self, model: str, field: str, field_type: Any):
        self.field_type = field_type
        type_name = getattr(field_type, "__name__", repr(field_type))
        super().__init__(
            f"{type_name} is not supported (field {model}.{field})",
            model=model,
            field=field,
        )
        self.context.metadata["type"] = type_name


class InstantiationError(ModelError):
    """A model class cannot be constructed without arguments."""

    def __init__(self, model: str, cause: Exception | None = None):
        super().__init__(
            f'Couldn\'t instantiate model via "{model}()"',
            model=model,
            cause=cause,
        )


# =============================================================================
# MAPPING ERRORS
# =============================================================================


class MappingError(TabulaError):
    """Reading or writing a model attribute failed during marshalling."""

    default_category = ErrorCategory.MAPPING
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.value = value
        if model is not None:
            self.context.model = model
        if field is not None:
            self.context.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TabulaError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(TabulaError):
    """Database query or driver error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class QueryError(DatabaseError):
    """SQL statement failed or could not be built."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Database connection or pool error."""

    default_retryable = True


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TabulaError",
    # Model
    "ModelError",
    "UnsupportedTypeError",
    "InstantiationError",
    # Mapping
    "MappingError",
    # Config
    "ConfigError",
    # Database
    "DatabaseError",
    "QueryError",
    "DatabaseConnectionError",
]
