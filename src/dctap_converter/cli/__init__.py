"""
Command-line interface for the DCTap converter.

Modules:
- parsers: argparse configuration
- helpers: config loading, logging setup and console formatting
- commands: one command class per subcommand
"""

from .parsers import create_argument_parser

__all__ = ['create_argument_parser']
