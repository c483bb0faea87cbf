"""
CSV/TSV import and export commands.
"""

import argparse
import logging
import sys

from .base import BaseCommand
from ..helpers import print_footer, print_header
from ...constants import ExitCode
from ...errors import DCTapError
from ...formats.csv import CSVConverter


logger = logging.getLogger(__name__)


class ImportCSVCommand(BaseCommand):
    """
    Import a DCTap CSV/TSV file into a new workspace.

    Usage:
        import-csv <file> [--name NAME]
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = CSVConverter(self.get_store(), cache=self.get_cache())
        try:
            result = converter.import_file(args.file, workspace_name=args.name)
        except (DCTapError, FileNotFoundError) as e:
            return self.report_error(e)

        print_header("CSV IMPORT SUMMARY")
        print(result.get_summary())
        print_footer()

        if not result.success:
            print("✗ Import failed; no workspace was created")
            return ExitCode.VALIDATION_ERROR
        print(f"✓ Imported {result.rows_imported} rows into workspace {result.workspace_id}")
        return ExitCode.SUCCESS


class ExportCSVCommand(BaseCommand):
    """
    Export a workspace as CSV or TSV.

    Usage:
        export-csv <workspace> [--format csv|tsv] [--output FILE]
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        converter = CSVConverter(self.get_store(), cache=self.get_cache())
        try:
            workspace = self.resolve_workspace(args.workspace)
            if args.output:
                path = converter.export_to_file(workspace.id, args.output, fmt=args.format)
                print(f"✓ Exported '{workspace.name}' to: {path}")
            else:
                sys.stdout.write(converter.export_workspace(workspace.id, fmt=args.format) + "\n")
        except DCTapError as e:
            return self.report_error(e)
        return ExitCode.SUCCESS
