"""
tabula.core - Database and ambient infrastructure.

Modules
-------
errors          TabulaError hierarchy (ModelError, MappingError, QueryError, ...)
logging         structlog configuration and get_logger()
enums           DatabaseType and backend-name normalization
settings        TabulaSettings (pydantic-settings) and connect()
protocols       Connection and Database protocols
dialect         Dialect protocol and SQLite/MySQL/PostgreSQL dialects
adapters        Database adapters and registry
"""

from tabula.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    InstantiationError,
    MappingError,
    ModelError,
    QueryError,
    TabulaError,
    UnsupportedTypeError,
)
from tabula.core.protocols import Connection, Database

__all__ = [
    "ConfigError",
    "DatabaseConnectionError",
    "DatabaseError",
    "ErrorCategory",
    "ErrorContext",
    "InstantiationError",
    "MappingError",
    "ModelError",
    "QueryError",
    "TabulaError",
    "UnsupportedTypeError",
    "Connection",
    "Database",
]
