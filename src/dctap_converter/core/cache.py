"""
In-memory cache of converter outputs keyed by workspace.

The store signals every mutation through ``invalidate(workspace_id)``, so
cached exports are dropped as soon as the workspace changes.

Usage:
    cache = ExportCache()
    store = SQLiteStore(db_path, invalidator=cache)
    converter = MarvaProfileConverter(store, cache=cache)
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


class CacheKind(Enum):
    """Kinds of cached export output."""
    MARVA = "marva"
    STARTING_POINTS = "starting_points"
    CSV = "csv"
    TSV = "tsv"


class _Missing:
    """Sentinel type for "not cached", distinct from a cached None."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass
class _CacheEntry:
    data: Any
    timestamp: float


class ExportCache:
    """Per-workspace cache of Marva, Starting Point, CSV and TSV exports."""

    def __init__(self) -> None:
        self._entries: Dict[Tuple[CacheKind, str], _CacheEntry] = {}

    def get(self, kind: CacheKind, workspace_id: str) -> Any:
        """Return the cached value, or MISSING when nothing is cached.

        A cached ``None`` (for example a workspace without starting points)
        is returned as ``None``.
        """
        entry = self._entries.get((kind, workspace_id))
        return MISSING if entry is None else entry.data

    def set(self, kind: CacheKind, workspace_id: str, data: Any) -> None:
        self._entries[(kind, workspace_id)] = _CacheEntry(data, time.time())

    def invalidate(self, workspace_id: str) -> None:
        """Drop every cached export of one workspace."""
        removed = [key for key in self._entries if key[1] == workspace_id]
        for key in removed:
            del self._entries[key]
        if removed:
            logger.debug(f"Cache invalidated for workspace: {workspace_id}")

    def invalidate_all(self) -> None:
        self._entries.clear()
        logger.debug("All caches invalidated")

    def stats(self) -> Dict[str, int]:
        """Count cached entries per kind."""
        counts = {kind.value: 0 for kind in CacheKind}
        for kind, _ in self._entries:
            counts[kind.value] += 1
        return counts
