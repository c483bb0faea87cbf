"""
Tests for the CSV/TSV parser.

This module tests:
- Delimiter detection and quote-aware field splitting
- Header normalization
- shapeID inheritance and the default shape
- Rejection of empty and column-less input
"""

import pytest

from dctap_converter.formats.csv import CSVParser
from dctap_converter.formats.csv.csv_parser import detect_delimiter, normalize_header, parse_line, split_records
from fixtures import (
    EMPTY_SHAPE_CSV,
    LC_COLUMNS_CSV,
    MISSING_COLUMNS_CSV,
    NO_SHAPE_CSV,
    PERSON_BOOK_CSV,
    PERSON_CSV,
    PERSON_TSV,
)


@pytest.fixture
def parser():
    return CSVParser()


@pytest.mark.unit
class TestLineHelpers:
    """Low-level splitting helpers."""

    def test_detect_comma(self):
        assert detect_delimiter("a,b,c\n1\t2") == ","

    def test_detect_tab(self):
        assert detect_delimiter("a\tb\tc,d\n") == "\t"

    def test_tie_is_comma(self):
        """Equal counts fall back to CSV."""
        assert detect_delimiter("a\tb,c") == ","

    def test_quoted_delimiter(self):
        assert parse_line('a,"b, c",d', ",") == ["a", "b, c", "d"]

    def test_doubled_quote(self):
        assert parse_line('"say ""hi""",x', ",") == ['say "hi"', "x"]

    def test_fields_trimmed(self):
        assert parse_line(" a , b ,", ",") == ["a", "b", ""]

    def test_normalize_header(self):
        """Case and non-letters are ignored."""
        assert normalize_header("Shape ID") == "shapeid"
        assert normalize_header("value_node_type") == "valuenodetype"


@pytest.mark.unit
class TestCSVParser:
    """Whole-document parsing."""

    def test_inherits_shape_id(self, parser):
        """Blank shapeID cells continue the previous shape."""
        result = parser.parse(PERSON_CSV)
        assert result.success
        assert [(r.shape_id, r.row.property_id) for r in result.rows] == [
            ("Person", "foaf:name"),
            ("Person", "foaf:mbox"),
        ]
        assert result.rows[1].shape_label == "Person"
        assert result.warnings == []

    def test_all_columns(self, parser):
        """Every known column lands on the row."""
        result = parser.parse(PERSON_BOOK_CSV)
        first = result.rows[0]
        assert first.resource_uri == "foaf:Person"
        assert first.row.mandatory == "true"
        assert first.row.repeatable == "false"
        assert first.row.value_data_type == "xsd:string"
        title = result.rows[2]
        assert title.shape_id == "Book"
        assert title.row.note == "Title, main"
        assert result.rows[3].row.value_shape == "Person"

    def test_tsv(self, parser):
        result = parser.parse(PERSON_TSV)
        assert result.detected_format == "tsv"
        assert [r.row.property_label for r in result.rows] == ["Name", "Age"]

    def test_lc_columns(self, parser):
        """LC extension columns are recognised."""
        row = parser.parse(LC_COLUMNS_CSV).rows[0].row
        assert row.value_shape == "A | B"
        assert row.lc_default_literal == "English"
        assert row.lc_default_uri == "http://id.loc.gov/vocabulary/languages/eng"
        assert row.lc_data_type_uri == "xsd:string"
        assert row.lc_remark == "See the manual, section 2"

    def test_default_shape_warning(self, parser):
        """Rows before any shapeID go to the default shape with a warning."""
        result = parser.parse(NO_SHAPE_CSV)
        assert result.success
        assert result.rows[0].shape_id == "default"
        assert len(result.warnings) == 1
        assert result.warnings[0].row == 2

    def test_shape_only_line_kept(self, parser):
        """A line naming only a shape is kept so the shape exists."""
        result = parser.parse(EMPTY_SHAPE_CSV)
        assert [r.shape_id for r in result.rows] == ["Empty", "Person"]
        assert not result.rows[0].row.has_data()

    def test_blank_lines_and_crlf(self, parser):
        content = "shapeID,propertyID\r\n\r\nPerson,foaf:name\r\n,\r\n"
        result = parser.parse(content)
        assert len(result.rows) == 1

    def test_quoted_newline_stays_in_record(self, parser):
        content = 'shapeID,propertyID,note\nPerson,foaf:name,"two\nlines"\n,foaf:age,\n'
        result = parser.parse(content)
        assert [(r.shape_id, r.row.property_id) for r in result.rows] == [
            ("Person", "foaf:name"),
            ("Person", "foaf:age"),
        ]
        assert result.rows[0].row.note == "two\nlines"

    def test_split_records_ignores_doubled_quotes(self):
        content = 'a,"say ""hi""\r\nthere"\r\nb,c'
        assert split_records(content) == ['a,"say ""hi""\r\nthere"', "b,c"]

    def test_unknown_headers_ignored(self, parser):
        result = parser.parse("shapeID,colour,propertyID\nPerson,red,foaf:name\n")
        assert result.rows[0].row.property_id == "foaf:name"

    def test_empty_file(self, parser):
        result = parser.parse("\n\n")
        assert not result.success
        assert result.errors[0].message == "Empty file"

    def test_missing_required_columns(self, parser):
        """Either propertyID or shapeID must be present."""
        result = parser.parse(MISSING_COLUMNS_CSV)
        assert not result.success
        assert result.rows == []
        assert "propertyID or shapeID" in result.errors[0].message
