"""Environment-driven settings for tabula.

``TabulaSettings`` reads ``TABULA_*`` environment variables (and a ``.env``
file) to pick a database backend and logging behaviour, so applications
built on table bindings need no hand-written connection plumbing.

Examples:
    >>> import os
    >>> os.environ["TABULA_DB_TYPE"] = "sqlite"
    >>> os.environ["TABULA_DATABASE"] = "accounts.db"
    >>> settings = TabulaSettings()
    >>> db = connect(settings)
    >>> db.dialect.name
    'sqlite'

Tags:
    settings, configuration, pydantic, environment
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tabula.core.adapters import DatabaseAdapter, get_adapter
from tabula.core.enums import DatabaseType, normalize_db_type
from tabula.core.logging import configure_logging


class TabulaSettings(BaseSettings):
    """Database and logging settings.

    Fields
    ──────
    db_type      : Backend name (sqlite, postgresql, mysql)
    database     : SQLite path, or database name for server backends
    host, port   : Server address (ignored by SQLite)
    username     : Server login
    password     : Server password
    pool_size    : Connection pool size for server backends
    log_level    : Structlog log level
    json_logs    : JSON log output; None auto-detects from the tty
    """

    model_config = SettingsConfigDict(
        env_prefix="TABULA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    db_type: DatabaseType = DatabaseType.SQLITE
    database: str = Field(
        default=":memory:",
        description="SQLite path or server database name",
    )
    host: str = "localhost"
    port: int | None = None
    username: str | None = None
    password: str | None = None
    pool_size: int = 5

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("db_type", mode="before")
    @classmethod
    def resolve_db_type_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_db_type(value)
        return value

    def adapter_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`get_adapter`."""
        if self.db_type is DatabaseType.SQLITE:
            return {"path": self.database}
        return {
            "host": self.host,
            "port": self.port or _DEFAULT_PORTS[self.db_type],
            "database": self.database,
            "username": self.username,
            "password": self.password,
            "pool_size": self.pool_size,
        }


_DEFAULT_PORTS = {
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.MYSQL: 3306,
}


def connect(settings: TabulaSettings | None = None) -> DatabaseAdapter:
    """Configure logging and return a connected adapter for ``settings``."""
    settings = settings or TabulaSettings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    adapter = get_adapter(settings.db_type, **settings.adapter_kwargs())
    adapter.connect()
    return adapter


__all__ = [
    "TabulaSettings",
    "connect",
]
