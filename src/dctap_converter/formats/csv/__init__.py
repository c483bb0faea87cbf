"""
CSV/TSV Import/Export Module

Reads and writes DCTap tables with the LC extension columns
(lcDefaultLiteral, lcDefaultURI, lcDataTypeURI, lcRemark).

Usage:
    from dctap_converter.formats.csv import CSVConverter

    converter = CSVConverter(store)
    result = converter.import_file("profile.csv")
    text = converter.export_workspace(result.workspace_id, fmt="csv")
"""

from .csv_parser import (
    COLUMN_MAPPINGS,
    CSVParser,
    detect_delimiter,
    normalize_header,
    parse_line,
)

from .csv_converter import CSVConverter, escape_value

__all__ = [
    "COLUMN_MAPPINGS",
    "CSVParser",
    "CSVConverter",
    "detect_delimiter",
    "escape_value",
    "normalize_header",
    "parse_line",
]
