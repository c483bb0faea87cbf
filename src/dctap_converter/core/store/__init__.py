"""
Workspace store: protocols consumed by the converters and the SQLite backend.
"""

from .protocols import (
    CacheInvalidator,
    FolderRepository,
    NamespaceRepository,
    OptionsRepository,
    RowRepository,
    ShapeRepository,
    WorkspaceRepository,
    WorkspaceStore,
)
from .sqlite import SQLiteStore

__all__ = [
    "CacheInvalidator",
    "FolderRepository",
    "NamespaceRepository",
    "OptionsRepository",
    "RowRepository",
    "ShapeRepository",
    "WorkspaceRepository",
    "WorkspaceStore",
    "SQLiteStore",
]
