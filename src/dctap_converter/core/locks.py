"""
Locked workspace policy.

Workspaces can be locked by id or by name in ``locked-workspaces.json``:

    {
      "lockedWorkspaceIds": ["3f2c..."],
      "lockedWorkspaceNames": ["Production Profiles"]
    }

A missing or unreadable file means nothing is locked. The file is re-read
when its modification time changes.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Protocol, Union, runtime_checkable

from ..constants import StorageDefaults

logger = logging.getLogger(__name__)


@runtime_checkable
class LockPolicy(Protocol):
    """Decides whether a workspace may be modified."""

    def is_locked(self, workspace_id: str, workspace_name: Optional[str] = None) -> bool:
        ...


class LockedWorkspaces:
    """File-backed LockPolicy."""

    def __init__(self, config_file: Union[str, Path] = StorageDefaults.LOCKED_WORKSPACES_FILE):
        self.config_file = Path(config_file)
        self.locked_ids: List[str] = []
        self.locked_names: List[str] = []
        self._mtime: Optional[float] = None
        self._load()

    def _load(self) -> None:
        self.locked_ids = []
        self.locked_names = []
        self._mtime = None
        if not self.config_file.exists():
            return
        try:
            self._mtime = os.path.getmtime(self.config_file)
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load {self.config_file}: {e}")
            return
        if not isinstance(data, dict):
            logger.error(f"{self.config_file} must contain a JSON object")
            return
        self.locked_ids = [str(v) for v in data.get("lockedWorkspaceIds") or []]
        self.locked_names = [str(v) for v in data.get("lockedWorkspaceNames") or []]
        logger.info(
            f"Loaded locked workspaces config: {len(self.locked_ids)} IDs, {len(self.locked_names)} names"
        )

    def reload(self, force: bool = False) -> bool:
        """Re-read the file if it changed since the last load.

        Returns:
            True if the file was re-read.
        """
        try:
            mtime: Optional[float] = os.path.getmtime(self.config_file)
        except OSError:
            mtime = None
        if force or mtime != self._mtime:
            logger.info(f"{self.config_file} changed, reloading")
            self._load()
            return True
        return False

    def is_locked_by_id(self, workspace_id: str) -> bool:
        self.reload()
        return workspace_id in self.locked_ids

    def is_locked_by_name(self, workspace_name: str) -> bool:
        self.reload()
        return workspace_name in self.locked_names

    def is_locked(self, workspace_id: str, workspace_name: Optional[str] = None) -> bool:
        if self.is_locked_by_id(workspace_id):
            return True
        return bool(workspace_name) and self.is_locked_by_name(workspace_name)

    def lock(self, workspace_id: Optional[str] = None, workspace_name: Optional[str] = None) -> bool:
        """Add a workspace to the lock list and save. Returns False if already locked."""
        changed = False
        if workspace_id and workspace_id not in self.locked_ids:
            self.locked_ids.append(workspace_id)
            changed = True
        if workspace_name and workspace_name not in self.locked_names:
            self.locked_names.append(workspace_name)
            changed = True
        if changed:
            self.save()
        return changed

    def unlock(self, workspace_id: Optional[str] = None, workspace_name: Optional[str] = None) -> bool:
        """Remove a workspace from the lock lists by id and/or name and save."""
        changed = False
        if workspace_id in self.locked_ids:
            self.locked_ids.remove(workspace_id)
            changed = True
        if workspace_name in self.locked_names:
            self.locked_names.remove(workspace_name)
            changed = True
        if changed:
            self.save()
        return changed

    def save(self) -> None:
        data = {"lockedWorkspaceIds": self.locked_ids, "lockedWorkspaceNames": self.locked_names}
        if self.config_file.parent and not self.config_file.parent.exists():
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        self._mtime = os.path.getmtime(self.config_file)
