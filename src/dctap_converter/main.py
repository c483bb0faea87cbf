#!/usr/bin/env python3
"""
DCTap Converter command-line entry point.

Usage:
    dctap-converter workspace create <name>
    dctap-converter import-csv <file> [--name NAME]
    dctap-converter export-marva <workspace> [--output FILE]
    dctap-converter --help
"""

import sys
from typing import Dict, List, Optional, Type

from .cli.commands import (
    BaseCommand,
    ExportCSVCommand,
    ExportMarvaCommand,
    ExportStartingPointsCommand,
    ImportCSVCommand,
    ImportMarvaCommand,
    ImportStartingPointsCommand,
    LockCommand,
    ValidateCommand,
    WorkspaceCommand,
)
from .cli.parsers import create_argument_parser
from .constants import ExitCode


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'workspace': WorkspaceCommand,
    'import-csv': ImportCSVCommand,
    'export-csv': ExportCSVCommand,
    'import-marva': ImportMarvaCommand,
    'export-marva': ExportMarvaCommand,
    'import-starting-points': ImportStartingPointsCommand,
    'export-starting-points': ExportStartingPointsCommand,
    'validate': ValidateCommand,
    'lock': LockCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    command_class = COMMANDS.get(args.command)
    if command_class is None:
        parser.print_help()
        return ExitCode.SUCCESS

    command = command_class(config_path=getattr(args, 'config', None))
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\n✗ Cancelled")
        return ExitCode.CANCELLED


if __name__ == '__main__':
    sys.exit(main())
