"""
Workspace management commands: create, list, delete, duplicate.
"""

import argparse
import logging

from .base import BaseCommand
from ..helpers import confirm_action, print_footer, print_header
from ...constants import ExitCode
from ...errors import DCTapError


logger = logging.getLogger(__name__)


class WorkspaceCommand(BaseCommand):
    """
    Manage workspaces.

    Usage:
        workspace create <name>
        workspace list
        workspace delete <workspace> [--force]
        workspace duplicate <workspace> <new_name>
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Dispatch to the requested workspace action."""
        failure = self.prepare()
        if failure is not None:
            return failure

        handlers = {
            'create': self._create,
            'list': self._list,
            'delete': self._delete,
            'duplicate': self._duplicate,
        }
        handler = handlers.get(args.workspace_action)
        if handler is None:
            print(f"✗ Unknown workspace action: {args.workspace_action}")
            return ExitCode.ERROR
        try:
            return handler(args)
        except DCTapError as e:
            return self.report_error(e)

    def _create(self, args: argparse.Namespace) -> int:
        workspace = self.get_store().workspaces.create(args.name)
        print(f"✓ Created workspace '{workspace.name}'")
        print(f"  ID: {workspace.id}")
        return ExitCode.SUCCESS

    def _list(self, args: argparse.Namespace) -> int:
        store = self.get_store()
        workspaces = store.workspaces.list()
        if not workspaces:
            print("No workspaces found.")
            return ExitCode.SUCCESS

        lock_policy = self.get_lock_policy()
        print_header(f"WORKSPACES ({len(workspaces)})")
        for workspace in workspaces:
            marker = " [locked]" if lock_policy.is_locked(workspace.id, workspace.name) else ""
            shape_count = len(store.shapes.list(workspace.id))
            print(f"  {workspace.name}{marker}")
            print(f"    ID: {workspace.id}")
            print(f"    Shapes: {shape_count}  Updated: {workspace.updated_at}")
        print_footer()
        return ExitCode.SUCCESS

    def _delete(self, args: argparse.Namespace) -> int:
        workspace = self.resolve_workspace(args.workspace)
        locked = self.ensure_unlocked(workspace)
        if locked is not None:
            return locked

        if not args.force and not confirm_action(f"Delete workspace '{workspace.name}'?"):
            print("Delete cancelled.")
            return ExitCode.CANCELLED

        self.get_store().workspaces.delete(workspace.id)
        print(f"✓ Deleted workspace '{workspace.name}'")
        return ExitCode.SUCCESS

    def _duplicate(self, args: argparse.Namespace) -> int:
        source = self.resolve_workspace(args.workspace)
        copy = self.get_store().workspaces.duplicate(source.id, args.new_name)
        print(f"✓ Duplicated '{source.name}' as '{copy.name}'")
        print(f"  ID: {copy.id}")
        return ExitCode.SUCCESS
