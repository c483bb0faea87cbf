"""
Protocol Definitions for the Store Adapter.

The converters depend only on these protocols, so any storage engine that
offers keyed CRUD per workspace/shape/row can back them.

Protocols:
    CacheInvalidator: Receives "workspace changed" signals
    WorkspaceRepository: Workspace lifecycle
    ShapeRepository: Shapes keyed by (workspace_id, shape_id)
    RowRepository: Statement rows ordered by row_order
    NamespaceRepository: Prefix/URI table
    FolderRepository: Shape folders
    OptionsRepository: Workspace feature flags
    WorkspaceStore: Aggregate of the repositories above
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from ...shared.models.dctap import (
    Folder,
    Namespace,
    Shape,
    StatementRow,
    Workspace,
    WorkspaceOptions,
)


@runtime_checkable
class CacheInvalidator(Protocol):
    """Receives a signal whenever a workspace's data changes."""

    def invalidate(self, workspace_id: str) -> None:
        """Drop anything derived from the given workspace."""
        ...


@runtime_checkable
class WorkspaceRepository(Protocol):
    """Workspace lifecycle operations."""

    def create(self, name: str) -> Workspace: ...

    def get(self, workspace_id: str) -> Optional[Workspace]: ...

    def list(self) -> List[Workspace]: ...

    def update(self, workspace_id: str, name: str) -> Workspace: ...

    def delete(self, workspace_id: str) -> bool: ...

    def duplicate(self, workspace_id: str, new_name: str) -> Workspace: ...


@runtime_checkable
class ShapeRepository(Protocol):
    """Shape operations."""

    def list(self, workspace_id: str) -> List[Shape]: ...

    def get(self, workspace_id: str, shape_id: str) -> Optional[Shape]: ...

    def create(
        self,
        workspace_id: str,
        shape_id: str,
        label: Optional[str] = None,
        resource_uri: Optional[str] = None,
        folder_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Shape: ...

    def update(self, workspace_id: str, shape_id: str, changes: Dict[str, Any]) -> Shape: ...

    def delete(self, workspace_id: str, shape_id: str) -> bool: ...


@runtime_checkable
class RowRepository(Protocol):
    """Statement row operations."""

    def list(self, workspace_id: str, shape_id: str) -> List[StatementRow]: ...

    def get(self, workspace_id: str, shape_id: str, row_id: int) -> Optional[StatementRow]: ...

    def create(self, workspace_id: str, shape_id: str, row: StatementRow) -> StatementRow: ...

    def update_errors(
        self, workspace_id: str, shape_id: str, row_id: int, has_errors: bool, error_details: Optional[str]
    ) -> None: ...


@runtime_checkable
class NamespaceRepository(Protocol):
    """Namespace table operations."""

    def list(self, workspace_id: str) -> List[Namespace]: ...

    def create(self, workspace_id: str, prefix: str, uri: str) -> Namespace: ...


@runtime_checkable
class FolderRepository(Protocol):
    """Folder operations."""

    def list(self, workspace_id: str) -> List[Folder]: ...

    def create(self, workspace_id: str, name: str) -> Folder: ...

    def get_by_name(self, workspace_id: str, name: str) -> Optional[Folder]: ...

    def get_or_create(self, workspace_id: str, name: str) -> Folder: ...


@runtime_checkable
class OptionsRepository(Protocol):
    """Workspace options."""

    def get(self, workspace_id: str) -> WorkspaceOptions: ...

    def update(self, workspace_id: str, changes: Dict[str, Any]) -> WorkspaceOptions: ...


class WorkspaceStore(Protocol):
    """Aggregate store consumed by the converters."""

    workspaces: WorkspaceRepository
    shapes: ShapeRepository
    rows: RowRepository
    namespaces: NamespaceRepository
    folders: FolderRepository
    options: OptionsRepository
