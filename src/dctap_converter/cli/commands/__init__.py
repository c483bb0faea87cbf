"""
CLI command implementations.

- base.py: BaseCommand with config, store and lock policy access
- workspace.py: WorkspaceCommand (create, list, delete, duplicate)
- tabular.py: ImportCSVCommand, ExportCSVCommand
- marva.py: ImportMarvaCommand, ExportMarvaCommand
- starting_point.py: ImportStartingPointsCommand, ExportStartingPointsCommand
- validate.py: ValidateCommand
- lock.py: LockCommand
"""

from .base import AmbiguousWorkspaceError, BaseCommand
from .lock import LockCommand
from .marva import ExportMarvaCommand, ImportMarvaCommand
from .starting_point import ExportStartingPointsCommand, ImportStartingPointsCommand
from .tabular import ExportCSVCommand, ImportCSVCommand
from .validate import ValidateCommand
from .workspace import WorkspaceCommand


__all__ = [
    # Base
    'BaseCommand',
    'AmbiguousWorkspaceError',
    # Workspaces
    'WorkspaceCommand',
    'LockCommand',
    # Formats
    'ImportCSVCommand',
    'ExportCSVCommand',
    'ImportMarvaCommand',
    'ExportMarvaCommand',
    'ImportStartingPointsCommand',
    'ExportStartingPointsCommand',
    # Validation
    'ValidateCommand',
]
