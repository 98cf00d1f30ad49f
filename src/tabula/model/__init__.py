"""Model mapping: column declarations, metadata resolution, row mapping,
table bindings and query builders.

Modules
-------
columns         Column descriptor, column()/identity() field helpers, Row types
resolver        resolve_columns / resolve_identity / column_names
mapper          Schema synthesis and instance <-> row marshalling
table           Table binding (model + table name + database handle)
query           ModelSelect / ModelInsert / ModelUpdate / ModelDelete
"""

from .columns import COLUMN, IDENTITY, Column, Row, RowValue, Single, column, identity
from .mapper import (
    apply_generated_key,
    build_create_table_spec,
    from_row,
    synthesize_column_type,
    to_row,
)
from .query import ModelDelete, ModelInsert, ModelSelect, ModelUpdate
from .resolver import ResolvedColumn, column_names, resolve_columns, resolve_identity
from .table import Table

__all__ = [
    # Declarations
    "COLUMN",
    "IDENTITY",
    "Column",
    "Row",
    "RowValue",
    "Single",
    "column",
    "identity",
    # Resolution
    "ResolvedColumn",
    "resolve_columns",
    "resolve_identity",
    "column_names",
    # Mapping
    "synthesize_column_type",
    "build_create_table_spec",
    "to_row",
    "from_row",
    "apply_generated_key",
    # Binding
    "Table",
    "ModelSelect",
    "ModelInsert",
    "ModelUpdate",
    "ModelDelete",
]
