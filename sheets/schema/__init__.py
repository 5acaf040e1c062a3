"""
Schema registry module for managing sheet schema versions.
"""
from .registry import (
    NotFoundError,
    SchemaConfigError,
    SchemaDiff,
    SchemaRegistry,
    SchemaVersion,
    TableDefinition,
)
from .catalog import (
    build_registry,
    default_table_definitions,
)

__all__ = [
    "NotFoundError",
    "SchemaConfigError",
    "SchemaDiff",
    "SchemaRegistry",
    "SchemaVersion",
    "TableDefinition",
    "build_registry",
    "default_table_definitions",
]
