"""
Validate command: run the row rules over a workspace.
"""

import argparse
import logging
from typing import List, Tuple

from .base import BaseCommand
from ..helpers import format_count_summary, print_footer, print_header
from ...constants import ExitCode
from ...core.validators import RowValidator
from ...errors import DCTapError, ShapeNotFoundError
from ...shared.models.validation import ValidationResult


logger = logging.getLogger(__name__)


class ValidateCommand(BaseCommand):
    """
    Validate the rows of a workspace or of one shape.

    With --save, each row's outcome is stored on the row
    (hasErrors/errorDetails); this counts as a modification and is refused
    for locked workspaces.

    Usage:
        validate <workspace> [--shape SHAPE_ID] [--save]
    """

    def execute(self, args: argparse.Namespace) -> int:
        failure = self.prepare()
        if failure is not None:
            return failure

        store = self.get_store()
        validator = RowValidator(store)
        try:
            workspace = self.resolve_workspace(args.workspace)
            if args.save:
                locked = self.ensure_unlocked(workspace)
                if locked is not None:
                    return locked

            if args.shape:
                if store.shapes.get(workspace.id, args.shape) is None:
                    raise ShapeNotFoundError(workspace.id, args.shape)
                shape_ids = [args.shape]
            else:
                shape_ids = [s.shape_id for s in store.shapes.list(workspace.id)]

            results: List[Tuple[str, ValidationResult]] = []
            for shape_id in shape_ids:
                if args.save:
                    result = validator.revalidate_shape(workspace.id, shape_id)
                else:
                    result = validator.validate_shape(workspace.id, shape_id)
                results.append((shape_id, result))
        except ShapeNotFoundError as e:
            print(f"✗ {e}")
            return ExitCode.NOT_FOUND
        except DCTapError as e:
            return self.report_error(e)

        print_header(f"VALIDATION: {workspace.name}")
        error_count = 0
        warning_count = 0
        for shape_id, result in results:
            error_count += len(result.errors)
            warning_count += len(result.warnings)
            if result.valid and not result.warnings:
                continue
            print(f"  {shape_id}:")
            for issue in result.errors + result.warnings:
                row = f"row {issue.row + 1}" if issue.row is not None else "shape"
                column = f" [{issue.column}]" if issue.column else ""
                print(f"    {issue.severity.value.upper()} {row}{column}: {issue.message}")
        print(format_count_summary({
            "Shapes": len(results),
            "Errors": error_count,
            "Warnings": warning_count,
        }))
        print_footer()

        if error_count:
            print(f"✗ Found {error_count} errors")
            return ExitCode.VALIDATION_ERROR
        print("✓ All rows are valid")
        return ExitCode.SUCCESS
