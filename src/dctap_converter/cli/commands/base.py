"""
Base command class.

This module contains the base command class that all CLI commands inherit
from. Stores, caches and lock policies can be injected for testing; otherwise
they are built from the configuration file.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..helpers import (
    load_config,
    get_default_config_path,
    setup_logging,
)
from ...constants import ExitCode
from ...core.cache import ExportCache
from ...core.config import StorageConfig
from ...core.locks import LockedWorkspaces, LockPolicy
from ...core.store.protocols import WorkspaceStore
from ...core.store.sqlite import SQLiteStore
from ...errors import DCTapError, InputFormatError, StoreError, WorkspaceNotFoundError
from ...shared.models.dctap import Workspace


logger = logging.getLogger(__name__)


class AmbiguousWorkspaceError(DCTapError):
    """Raised when a workspace name matches more than one workspace."""

    def __init__(self, name: str, count: int):
        self.name = name
        super().__init__(f"{count} workspaces are named '{name}'; use the workspace id instead")


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides configuration loading, logging setup and access to the
    workspace store. Subclasses implement execute().
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        store: Optional[WorkspaceStore] = None,
        cache: Optional[ExportCache] = None,
        lock_policy: Optional[LockPolicy] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. When omitted, the
                default config.json is used if present, else built-in defaults.
            store: Optional store instance (for dependency injection).
            cache: Optional export cache (for dependency injection).
            lock_policy: Optional lock policy (for dependency injection).
        """
        self._explicit_config = config_path is not None
        self.config_path = config_path or get_default_config_path()
        self._store = store
        self._cache = cache
        self._lock_policy = lock_policy
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; a missing default config means built-in defaults."""
        if self._config is None:
            if not self._explicit_config and not Path(self.config_path).exists():
                logger.debug(f"No configuration at {self.config_path}; using defaults")
                self._config = {}
            else:
                self._config = load_config(self.config_path)
        return self._config

    @property
    def storage_config(self) -> StorageConfig:
        return StorageConfig.from_dict(self.config)

    def get_cache(self) -> ExportCache:
        """Get or create the export cache."""
        if self._cache is None:
            self._cache = ExportCache()
        return self._cache

    def get_store(self) -> WorkspaceStore:
        """Get or create the workspace store."""
        if self._store is None:
            self._store = SQLiteStore(self.storage_config.database_path, invalidator=self.get_cache())
        return self._store

    def get_lock_policy(self) -> LockPolicy:
        """Get or create the lock policy."""
        if self._lock_policy is None:
            self._lock_policy = LockedWorkspaces(self.storage_config.locked_workspaces_file)
        return self._lock_policy

    def setup_logging_from_config(self, allow_missing: bool = True) -> None:
        """Setup logging configuration, falling back gracefully if config is absent."""
        log_config: Dict[str, Any] = {}
        try:
            log_config = self.config.get('logging', {})
        except (FileNotFoundError, ValueError) as exc:
            if not allow_missing:
                raise
            print(f"Warning: Could not load logging configuration: {exc}")

        setup_logging(config=log_config)

    def prepare(self) -> Optional[int]:
        """Load configuration and set up logging.

        Returns:
            ExitCode.CONFIG_ERROR if the configuration is unusable, else None.
        """
        try:
            StorageConfig.from_dict(self.config)
        except (FileNotFoundError, ValueError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR
        self.setup_logging_from_config(allow_missing=False)
        return None

    # ========================================================================
    # Workspace helpers
    # ========================================================================

    def resolve_workspace(self, reference: str) -> Workspace:
        """
        Find a workspace by id, then by exact name.

        Raises:
            WorkspaceNotFoundError: If nothing matches.
            AmbiguousWorkspaceError: If several workspaces share the name.
        """
        store = self.get_store()
        workspace = store.workspaces.get(reference)
        if workspace is not None:
            return workspace
        matches = [ws for ws in store.workspaces.list() if ws.name == reference]
        if not matches:
            raise WorkspaceNotFoundError(reference)
        if len(matches) > 1:
            raise AmbiguousWorkspaceError(reference, len(matches))
        return matches[0]

    def ensure_unlocked(self, workspace: Workspace) -> Optional[int]:
        """Return ExitCode.LOCKED after reporting if the workspace is locked, else None."""
        if self.get_lock_policy().is_locked(workspace.id, workspace.name):
            logger.warning(f"Blocked modification of locked workspace {workspace.id} ({workspace.name})")
            print(f"✗ Workspace is locked and cannot be modified ({workspace.name})")
            return ExitCode.LOCKED
        return None

    @staticmethod
    def report_error(error: Exception) -> int:
        """Print an error and map it to an exit code."""
        if isinstance(error, WorkspaceNotFoundError):
            print(f"✗ {error}")
            return ExitCode.NOT_FOUND
        if isinstance(error, FileNotFoundError):
            print(f"✗ {error}")
            return ExitCode.FILE_NOT_FOUND
        if isinstance(error, InputFormatError):
            location = f" ({error.file_path})" if error.file_path else ""
            print(f"✗ {error}{location}")
            if error.details:
                print(f"  {error.details}")
            return ExitCode.VALIDATION_ERROR
        if isinstance(error, StoreError):
            print(f"✗ Storage error: {error}")
            return ExitCode.ERROR
        print(f"✗ {error}")
        return ExitCode.ERROR

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
