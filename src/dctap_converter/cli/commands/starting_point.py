"""
Starting-point import and export commands.
"""

import argparse
import json
import logging
import sys

from .base import BaseCommand
from ..helpers import print_footer, print_header
from ...constants import ExitCode
from ...errors import DCTapError
from ...formats.starting_point import StartingPointConverter


logger = logging.getLogger(__name__)


class ImportStartingPointsCommand(BaseCommand):
    """
    Import a starting-points file into an existing workspace.

    Usage:
        import-starting-points <workspace> <file>
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = StartingPointConverter(self.get_store(), cache=self.get_cache())
        try:
            workspace = self.resolve_workspace(args.workspace)
            locked = self.ensure_unlocked(workspace)
            if locked is not None:
                return locked
            result = converter.import_file(workspace.id, args.file)
        except (DCTapError, FileNotFoundError) as e:
            return self.report_error(e)

        print_header("STARTING POINTS IMPORT SUMMARY")
        print(result.get_summary())
        print_footer()
        print(f"✓ Imported starting points into '{workspace.name}'")
        return ExitCode.SUCCESS


class ExportStartingPointsCommand(BaseCommand):
    """
    Export a workspace's starting points.

    Usage:
        export-starting-points <workspace> [--output FILE]
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = StartingPointConverter(self.get_store(), cache=self.get_cache())
        try:
            workspace = self.resolve_workspace(args.workspace)
            exported = converter.export_starting_points(workspace.id)
        except DCTapError as e:
            return self.report_error(e)

        if exported is None:
            print(f"No starting points to export in '{workspace.name}'")
            return ExitCode.SUCCESS
        if args.output:
            path = converter.export_to_file(workspace.id, args.output)
            print(f"✓ Exported starting points to: {path}")
        else:
            sys.stdout.write(json.dumps(exported, indent=2, ensure_ascii=False) + "\n")
        return ExitCode.SUCCESS
