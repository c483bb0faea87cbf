"""
CSV/TSV Parser.

Parses DCTap tables into shape-grouped statement rows. The parser is a
pure text transform; it never touches the store.

Parsing rules:
- Delimiter: tab if the first line has more tabs than commas, else comma
- Records split on LF or CRLF outside double quotes; blank records are dropped
- Fields: quote-aware scan, ``""`` inside quotes is a literal quote, trimmed
- Headers: lower-cased, non-letters stripped, matched against the known columns
- A blank shapeID inherits the previous explicit shapeID; rows before any
  shapeID fall into shape ``default`` with a warning

Usage:
    from dctap_converter.formats.csv import CSVParser

    result = CSVParser().parse(content)
    if result.success:
        for parsed in result.rows:
            print(parsed.shape_id, parsed.row.property_id)
"""

import logging
import re
from typing import Dict, List, Optional

from ...constants import ShapeConventions
from ...shared.models.dctap import StatementRow
from ...shared.models.results import CSVParseResult, ParsedRow
from ...shared.models.validation import Severity, ValidationIssue

logger = logging.getLogger(__name__)


# Normalized header -> target attribute. The three shape-identity columns
# are resolved separately from the statement fields.
COLUMN_MAPPINGS: Dict[str, str] = {
    "shapeid": "shape_id",
    "shapelabel": "shape_label",
    "resourceuri": "resource_uri",
    "propertyid": "property_id",
    "propertylabel": "property_label",
    "mandatory": "mandatory",
    "repeatable": "repeatable",
    "valuenodetype": "value_node_type",
    "valuedatatype": "value_data_type",
    "valueshape": "value_shape",
    "valueconstraint": "value_constraint",
    "valueconstrainttype": "value_constraint_type",
    "note": "note",
    # LC extension columns
    "lcdefaultliteral": "lc_default_literal",
    "lcdefaulturi": "lc_default_uri",
    "lcdatatypeuri": "lc_data_type_uri",
    "lcremark": "lc_remark",
}

SHAPE_COLUMNS = ("shape_id", "shape_label", "resource_uri")

_NON_LETTERS = re.compile(r"[^a-z]")


def detect_delimiter(content: str) -> str:
    """Return ``\\t`` if the first line has more tabs than commas, else ``,``."""
    first_line = content.split("\n")[0]
    return "\t" if first_line.count("\t") > first_line.count(",") else ","


def split_records(content: str) -> List[str]:
    """
    Split content into records on LF or CRLF, except inside double quotes.

    A quoted cell may span several physical lines; its newlines stay in
    the record and parse_line keeps them in the field. A doubled quote
    toggles the quote state twice, so it never ends a quoted cell.
    """
    records: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(content):
        char = content[i]
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif not in_quotes and char == "\n":
            records.append("".join(current))
            current = []
        elif not in_quotes and char == "\r" and i + 1 < len(content) and content[i + 1] == "\n":
            records.append("".join(current))
            current = []
            i += 1
        else:
            current.append(char)
        i += 1
    records.append("".join(current))
    return records


def parse_line(line: str, delimiter: str) -> List[str]:
    """Split one line into trimmed fields, honoring double quotes."""
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current).strip())
    return fields


def normalize_header(header: str) -> str:
    return _NON_LETTERS.sub("", header.lower())


def _cell(values: List[str], columns: Dict[str, int], attr: str) -> Optional[str]:
    index = columns.get(attr)
    if index is None or index >= len(values):
        return None
    return values[index] or None


class CSVParser:
    """
    Parse CSV/TSV DCTap content.

    Example:
        >>> result = CSVParser().parse("shapeID,propertyID\\nPerson,foaf:name")
        >>> result.rows[0].shape_id
        'Person'
    """

    def parse(self, content: str) -> CSVParseResult:
        """
        Parse CSV or TSV text.

        Args:
            content: Full file content.

        Returns:
            CSVParseResult; on malformed input ``success`` is False and
            ``errors`` explains why, with no rows.
        """
        delimiter = detect_delimiter(content)
        detected_format = "tsv" if delimiter == "\t" else "csv"
        lines = [record for record in split_records(content) if record.strip()]

        if not lines:
            return CSVParseResult(
                success=False,
                errors=[ValidationIssue("Empty file", Severity.ERROR)],
                detected_format=detected_format,
            )

        columns: Dict[str, int] = {}
        for index, header in enumerate(parse_line(lines[0], delimiter)):
            mapped = COLUMN_MAPPINGS.get(normalize_header(header))
            if mapped:
                columns[mapped] = index

        if "property_id" not in columns and "shape_id" not in columns:
            return CSVParseResult(
                success=False,
                errors=[ValidationIssue("File must contain at least propertyID or shapeID column", Severity.ERROR)],
                detected_format=detected_format,
            )

        result = CSVParseResult(success=True, detected_format=detected_format)
        current_shape_id: Optional[str] = None
        current_label: Optional[str] = None
        current_resource_uri: Optional[str] = None

        for i in range(1, len(lines)):
            values = parse_line(lines[i], delimiter)
            line_number = i + 1

            row_shape_id = _cell(values, columns, "shape_id")
            row_label = _cell(values, columns, "shape_label")
            row_resource_uri = _cell(values, columns, "resource_uri")

            if row_shape_id:
                current_shape_id = row_shape_id
                current_label = row_label
                current_resource_uri = row_resource_uri
            elif row_label and not current_label:
                current_label = row_label

            row = StatementRow(**{
                attr: _cell(values, columns, attr) for attr in columns if attr not in SHAPE_COLUMNS
            })

            if not row.has_data() and not row_shape_id:
                continue

            if not current_shape_id:
                result.warnings.append(ValidationIssue(
                    f'Row has no associated shapeID, will use "{ShapeConventions.DEFAULT_SHAPE_ID}"',
                    Severity.WARNING,
                    row=line_number,
                ))
                current_shape_id = ShapeConventions.DEFAULT_SHAPE_ID

            result.rows.append(ParsedRow(current_shape_id, current_label, current_resource_uri, row))

        logger.debug(f"Parsed {len(result.rows)} rows ({detected_format})")
        return result
