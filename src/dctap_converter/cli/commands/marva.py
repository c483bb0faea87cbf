"""
Marva profile import and export commands.
"""

import argparse
import json
import logging
import sys

from .base import BaseCommand
from ..helpers import print_footer, print_header
from ...constants import ExitCode
from ...errors import DCTapError
from ...formats.marva import MarvaProfileConverter


logger = logging.getLogger(__name__)


class ImportMarvaCommand(BaseCommand):
    """
    Import Marva profile documents into a new workspace.

    Usage:
        import-marva <file> --name NAME
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = MarvaProfileConverter(self.get_store(), cache=self.get_cache())
        try:
            result = converter.import_file(args.file, args.name)
        except (DCTapError, FileNotFoundError) as e:
            return self.report_error(e)

        print_header("MARVA IMPORT SUMMARY")
        print(result.get_summary())
        print_footer()
        print(f"✓ Imported {result.shapes_created} shapes into workspace {result.workspace_id}")
        return ExitCode.SUCCESS


class ExportMarvaCommand(BaseCommand):
    """
    Export a workspace as Marva profile documents.

    Usage:
        export-marva <workspace> [--output FILE]
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = MarvaProfileConverter(self.get_store(), cache=self.get_cache())
        try:
            workspace = self.resolve_workspace(args.workspace)
            if args.output:
                path = converter.export_to_file(workspace.id, args.output)
                print(f"✓ Exported '{workspace.name}' to: {path}")
            else:
                documents = converter.export_profiles(workspace.id)
                sys.stdout.write(json.dumps(documents, indent=2, ensure_ascii=False) + "\n")
        except DCTapError as e:
            return self.report_error(e)
        return ExitCode.SUCCESS
