
# Configuration module for the sheet schema registry.

from .settings import (
    AppConfig,
    SheetConfig,
    SchemaVersionConfig,
    config,
    get_config,
    reload_config,
)

__all__ = [
    "AppConfig",
    "SheetConfig",
    "SchemaVersionConfig",
    "config",
    "get_config",
    "reload_config",
]
