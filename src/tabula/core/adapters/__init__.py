"""Database adapters -- one ``Database`` handle for three backends.

Each adapter is import-guarded: the driver is only required at
``connect()`` time. Install the corresponding extra::

    pip install tabula[postgresql]   # psycopg2-binary
    pip install tabula[mysql]        # mysql-connector-python

Architecture::

    DatabaseAdapter (base.py)        Abstract base: create_table/execute/query/insert
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- PostgreSQLAdapter        psycopg2 (optional), RETURNING for keys
        |-- MySQLAdapter             mysql.connector (optional)

    get_adapter (registry.py)        backend name -> unconnected adapter
"""

from tabula.core.dialect import Dialect, get_dialect
from tabula.core.enums import DatabaseType
from tabula.core.protocols import Connection, Database

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .registry import get_adapter
from .sqlite import SQLiteAdapter

__all__ = [
    "DatabaseType",
    # Protocols / Abstractions
    "Connection",
    "Database",
    "Dialect",
    "get_dialect",
    # Base class
    "DatabaseAdapter",
    # Implementations
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    # Factory
    "get_adapter",
]
