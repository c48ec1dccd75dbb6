"""
Configuration management with typed Pydantic models.

Paths and store pragmas only; the dataset shape is fixed.
"""

from f1flat.config.loader import load_config
from f1flat.config.settings import (
    JournalMode,
    LoadConfig,
    LoaderSettings,
    PathsConfig,
    StoreConfig,
    SynchronousMode,
)

__all__ = [
    "JournalMode",
    "LoadConfig",
    "LoaderSettings",
    "PathsConfig",
    "StoreConfig",
    "SynchronousMode",
    "load_config",
]
