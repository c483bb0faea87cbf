"""
Exception hierarchy shared by the store, converters and CLI.
"""

from typing import Optional


class DCTapError(Exception):
    """Base class for all converter and store errors."""


class InputFormatError(DCTapError):
    """Raised when an input document is malformed.

    Raised before any store mutation takes place.
    """

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[str] = None):
        self.file_path = file_path
        self.details = details
        super().__init__(message)


class StartingPointFormatError(InputFormatError):
    """Raised when a starting-points document lacks its config or menu groups."""


class StoreError(DCTapError):
    """Raised for storage failures."""


class WorkspaceNotFoundError(StoreError):
    """Raised when a workspace id does not exist."""

    def __init__(self, workspace_id: str):
        self.workspace_id = workspace_id
        super().__init__(f"Workspace not found: {workspace_id}")


class ShapeNotFoundError(StoreError):
    """Raised when a shape id does not exist in a workspace."""

    def __init__(self, workspace_id: str, shape_id: str):
        self.workspace_id = workspace_id
        self.shape_id = shape_id
        super().__init__(f"Shape not found: {shape_id}")


class RowNotFoundError(StoreError):
    """Raised when a row id does not exist in a shape."""

    def __init__(self, shape_id: str, row_id: int):
        self.shape_id = shape_id
        self.row_id = row_id
        super().__init__(f"Row {row_id} not found in shape {shape_id}")


class FolderNotFoundError(StoreError):
    """Raised when a folder id does not exist."""

    def __init__(self, folder_id: str):
        self.folder_id = folder_id
        super().__init__(f"Folder not found: {folder_id}")


class NamespaceNotFoundError(StoreError):
    """Raised when a namespace prefix does not exist in a workspace."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"Namespace prefix not found: {prefix}")


class DuplicateNamespaceError(StoreError):
    """Raised when a namespace prefix already exists in a workspace."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"Namespace prefix already exists: {prefix}")


class DuplicateShapeError(StoreError):
    """Raised when creating a shape whose id already exists."""

    def __init__(self, shape_id: str):
        self.shape_id = shape_id
        super().__init__(f"Shape already exists: {shape_id}")
