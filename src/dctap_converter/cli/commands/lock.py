"""
Lock command: inspect and edit the locked workspaces file.
"""

import argparse
import logging

from .base import BaseCommand
from ...constants import ExitCode
from ...core.locks import LockedWorkspaces


logger = logging.getLogger(__name__)


class LockCommand(BaseCommand):
    """
    Manage locked workspaces.

    A workspace can be locked by id or by name. The target given on the
    command line is treated as an id when a workspace with that id exists,
    otherwise as a name; names may refer to workspaces not created yet.

    Usage:
        lock list
        lock lock <workspace>
        lock unlock <workspace>
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        policy = self.get_lock_policy()
        if not isinstance(policy, LockedWorkspaces):
            print("✗ The configured lock policy cannot be edited")
            return ExitCode.ERROR

        if args.lock_action == 'list':
            if not policy.locked_ids and not policy.locked_names:
                print("No workspaces are locked.")
                return ExitCode.SUCCESS
            for workspace_id in policy.locked_ids:
                print(f"  id:   {workspace_id}")
            for name in policy.locked_names:
                print(f"  name: {name}")
            return ExitCode.SUCCESS

        target = args.workspace
        by_id = self.get_store().workspaces.get(target) is not None
        kwargs = {'workspace_id': target} if by_id else {'workspace_name': target}
        kind = "id" if by_id else "name"

        if args.lock_action == 'lock':
            changed = policy.lock(**kwargs)
            print(f"✓ Locked workspace {kind} '{target}'" if changed else f"Workspace {kind} '{target}' is already locked")
            return ExitCode.SUCCESS

        if args.lock_action == 'unlock':
            changed = policy.unlock(**kwargs)
            if not changed:
                print(f"✗ Workspace {kind} '{target}' is not locked")
                return ExitCode.NOT_FOUND
            print(f"✓ Unlocked workspace {kind} '{target}'")
            return ExitCode.SUCCESS

        print(f"✗ Unknown lock action: {args.lock_action}")
        return ExitCode.ERROR
