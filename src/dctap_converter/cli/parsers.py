"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - workspace {create,list,delete,duplicate}
    - import-csv / export-csv
    - import-marva / export-marva
    - import-starting-points / export-starting-points
    - validate <workspace>
    - lock {list,lock,unlock}
"""

import argparse

from ..constants import TabularFormat


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration flags."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: config.json in the project root)'
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add common output-related flags."""
    parser.add_argument(
        '--output', '-o',
        help='Output file path (default: write to stdout)'
    )


def add_workspace_argument(parser: argparse.ArgumentParser) -> None:
    """Add the positional workspace reference."""
    parser.add_argument('workspace', help='Workspace id or exact name')


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        description="DCTap metadata profile converter (CSV/TSV, Marva profiles, starting points)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Workspaces
    %(prog)s workspace create "Monograph Profiles"
    %(prog)s workspace list
    %(prog)s workspace duplicate "Monograph Profiles" "Monograph Draft"

    # DCTap CSV/TSV
    %(prog)s import-csv samples/person.csv --name People
    %(prog)s export-csv People --format tsv --output people.tsv

    # Marva profiles and starting points
    %(prog)s import-marva profiles.json --name "LC Profiles"
    %(prog)s import-starting-points "LC Profiles" starting-points.json
    %(prog)s export-marva "LC Profiles" --output exported-profiles.json
    %(prog)s export-starting-points "LC Profiles" --output exported-starting-points.json

    # Validation and locking
    %(prog)s validate People --save
    %(prog)s lock lock "LC Profiles"
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_workspace_parser(subparsers)
    _add_import_csv_parser(subparsers)
    _add_export_csv_parser(subparsers)
    _add_import_marva_parser(subparsers)
    _add_export_marva_parser(subparsers)
    _add_import_starting_points_parser(subparsers)
    _add_export_starting_points_parser(subparsers)
    _add_validate_parser(subparsers)
    _add_lock_parser(subparsers)

    return parser


# ============================================================================
# Workspace Parsers
# ============================================================================

def _add_workspace_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the workspace command parser."""
    parser = subparsers.add_parser('workspace', help='Create, list, delete or duplicate workspaces')
    actions = parser.add_subparsers(dest='workspace_action', required=True)

    create = actions.add_parser('create', help='Create an empty workspace')
    create.add_argument('name', help='Workspace name')
    add_config_flags(create)

    list_parser = actions.add_parser('list', help='List workspaces')
    add_config_flags(list_parser)

    delete = actions.add_parser('delete', help='Delete a workspace and everything in it')
    add_workspace_argument(delete)
    delete.add_argument(
        '--force', '-f',
        action='store_true',
        help='Skip the confirmation prompt'
    )
    add_config_flags(delete)

    duplicate = actions.add_parser('duplicate', help='Copy a workspace under a new name')
    add_workspace_argument(duplicate)
    duplicate.add_argument('new_name', help='Name of the copy')
    add_config_flags(duplicate)


def _add_lock_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the lock command parser."""
    parser = subparsers.add_parser('lock', help='Manage locked workspaces')
    actions = parser.add_subparsers(dest='lock_action', required=True)

    list_parser = actions.add_parser('list', help='Show locked workspace ids and names')
    add_config_flags(list_parser)

    for action, help_text in (('lock', 'Lock a workspace'), ('unlock', 'Unlock a workspace')):
        action_parser = actions.add_parser(action, help=help_text)
        action_parser.add_argument('workspace', help='Workspace id, or a name to lock by name')
        add_config_flags(action_parser)


# ============================================================================
# Format Parsers
# ============================================================================

def _add_import_csv_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the import-csv command parser."""
    parser = subparsers.add_parser('import-csv', help='Import a DCTap CSV/TSV file into a new workspace')
    parser.add_argument('file', help='Path to the CSV or TSV file')
    parser.add_argument(
        '--name', '-n',
        help='Workspace name (default: file name without extension)'
    )
    add_config_flags(parser)


def _add_export_csv_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export-csv command parser."""
    parser = subparsers.add_parser('export-csv', help='Export a workspace as DCTap CSV/TSV')
    add_workspace_argument(parser)
    parser.add_argument(
        '--format',
        choices=sorted(TabularFormat.DELIMITERS),
        default='csv',
        help='Output format (default: csv)'
    )
    add_output_flags(parser)
    add_config_flags(parser)


def _add_import_marva_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the import-marva command parser."""
    parser = subparsers.add_parser('import-marva', help='Import Marva profile documents into a new workspace')
    parser.add_argument('file', help='Path to the profiles JSON file')
    parser.add_argument(
        '--name', '-n',
        required=True,
        help='Workspace name'
    )
    add_config_flags(parser)


def _add_export_marva_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export-marva command parser."""
    parser = subparsers.add_parser('export-marva', help='Export a workspace as Marva profile documents')
    add_workspace_argument(parser)
    add_output_flags(parser)
    add_config_flags(parser)


def _add_import_starting_points_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the import-starting-points command parser."""
    parser = subparsers.add_parser(
        'import-starting-points',
        help='Import a starting-points file into an existing workspace'
    )
    add_workspace_argument(parser)
    parser.add_argument('file', help='Path to the starting-points JSON file')
    add_config_flags(parser)


def _add_export_starting_points_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export-starting-points command parser."""
    parser = subparsers.add_parser('export-starting-points', help="Export a workspace's starting points")
    add_workspace_argument(parser)
    add_output_flags(parser)
    add_config_flags(parser)


# ============================================================================
# Validation Parser
# ============================================================================

def _add_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the validate command parser."""
    parser = subparsers.add_parser('validate', help='Validate the rows of a workspace')
    add_workspace_argument(parser)
    parser.add_argument(
        '--shape',
        help='Validate a single shape'
    )
    parser.add_argument(
        '--save', '-s',
        action='store_true',
        help='Store each row\'s validation outcome on the row'
    )
    add_config_flags(parser)
