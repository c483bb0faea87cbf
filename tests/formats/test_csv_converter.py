"""
Tests for CSV/TSV import and export.

This module tests:
- Workspace creation and counts on import
- Placeholder namespaces and full-URI warnings
- Export layout, escaping and pipes
- Import/export round trip and caching
"""

import pytest

from dctap_converter.constants import TabularFormat
from dctap_converter.core.cache import CacheKind
from dctap_converter.errors import InputFormatError, WorkspaceNotFoundError
from dctap_converter.formats.csv import CSVConverter
from dctap_converter.formats.csv.csv_converter import escape_value
from dctap_converter.formats.csv.csv_parser import parse_line
from dctap_converter.shared.models.dctap import StatementRow
from fixtures import EMPTY_SHAPE_CSV, MISSING_COLUMNS_CSV, PERSON_BOOK_CSV, UNKNOWN_PREFIX_CSV


@pytest.fixture
def converter(store, cache):
    return CSVConverter(store, cache=cache)


@pytest.mark.unit
class TestEscapeValue:
    """Cell escaping."""

    def test_plain(self):
        assert escape_value("foaf:name", ",") == "foaf:name"

    def test_none(self):
        assert escape_value(None, ",") == ""

    def test_delimiter_quoted(self):
        assert escape_value("a,b", ",") == '"a,b"'
        assert escape_value("a,b", "\t") == "a,b"

    def test_quotes_doubled(self):
        assert escape_value('say "hi"', ",") == '"say ""hi"""'

    def test_newline_to_pipes(self):
        assert escape_value("A\nB", ",", convert_newlines_to_pipes=True) == "A | B"
        assert escape_value("A\nB", ",") == '"A\nB"'


@pytest.mark.unit
class TestCSVImport:
    """Importing tables into new workspaces."""

    def test_import_counts(self, converter, store):
        result = converter.import_to_workspace(PERSON_BOOK_CSV, "Books")
        assert result.success
        assert (result.shapes_created, result.rows_imported) == (2, 4)
        workspace = store.workspaces.get(result.workspace_id)
        assert workspace.name == "Books"
        person = store.shapes.get(workspace.id, "Person")
        assert (person.label, person.resource_uri) == ("Person", "foaf:Person")
        rows = store.rows.list(workspace.id, "Book")
        assert [r.row_order for r in rows] == [0, 1]
        assert rows[0].note == "Title, main"

    def test_placeholder_namespaces(self, converter, store):
        """Unknown prefixes become placeholder namespaces, once each."""
        result = converter.import_to_workspace(UNKNOWN_PREFIX_CSV, "Things")
        assert result.unknown_namespaces == ["ex"]
        namespaces = {ns.prefix: ns.uri for ns in store.namespaces.list(result.workspace_id)}
        assert namespaces["ex"] == "http://example.org/ex/"
        assert "http" not in namespaces
        messages = [w.message for w in result.warnings]
        assert sum("placeholder URI created" in m for m in messages) == 1
        assert sum("full URI" in m for m in messages) == 1

    def test_empty_shape_created(self, converter, store):
        """A shape-only line creates a shape without rows."""
        result = converter.import_to_workspace(EMPTY_SHAPE_CSV, "Shapes")
        assert result.shapes_created == 2
        assert result.rows_imported == 1
        assert store.rows.list(result.workspace_id, "Empty") == []

    def test_rejected_input_creates_nothing(self, converter, store):
        result = converter.import_to_workspace(MISSING_COLUMNS_CSV, "Broken")
        assert not result.success
        assert result.workspace_id is None
        assert store.workspaces.list() == []
        assert "Import failed" in result.get_summary()

    def test_import_twice_creates_two_workspaces(self, converter, store):
        first = converter.import_to_workspace(PERSON_BOOK_CSV, "Books")
        second = converter.import_to_workspace(PERSON_BOOK_CSV, "Books")
        assert first.workspace_id != second.workspace_id
        assert len(store.workspaces.list()) == 2

    def test_import_file_uses_stem(self, converter, store, temp_csv_file):
        result = converter.import_file(temp_csv_file)
        assert store.workspaces.get(result.workspace_id).name == "people"

    def test_import_missing_file(self, converter, tmp_path):
        with pytest.raises(FileNotFoundError):
            converter.import_file(tmp_path / "absent.csv")

    def test_import_binary_file(self, converter, tmp_path):
        path = tmp_path / "binary.csv"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(InputFormatError):
            converter.import_file(path)


@pytest.mark.unit
class TestCSVExport:
    """Exporting workspaces as tables."""

    def test_header(self, converter, workspace):
        text = converter.export_workspace(workspace.id)
        assert text == ",".join(TabularFormat.EXPORT_HEADERS)

    def test_identity_on_first_row_only(self, converter, store, workspace):
        store.shapes.create(workspace.id, "Person", label="Person", resource_uri="foaf:Person")
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:name"))
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:mbox"))
        lines = converter.export_workspace(workspace.id).split("\n")
        assert parse_line(lines[1], ",")[:4] == ["Person", "Person", "foaf:Person", "foaf:name"]
        assert parse_line(lines[2], ",")[:4] == ["", "", "", "foaf:mbox"]

    def test_empty_shape_emits_one_line(self, converter, store, workspace):
        store.shapes.create(workspace.id, "Empty", label="Empty shape")
        lines = converter.export_workspace(workspace.id).split("\n")
        assert len(lines) == 2
        cells = parse_line(lines[1], ",")
        assert cells[:2] == ["Empty", "Empty shape"]
        assert len(cells) == len(TabularFormat.EXPORT_HEADERS)
        assert not any(cells[3:])

    def test_value_shape_pipes(self, converter, store, workspace):
        """valueShape and valueConstraint newlines become pipes; other fields keep them."""
        store.shapes.create(workspace.id, "Work")
        store.rows.create(workspace.id, "Work", StatementRow(
            property_id="bf:subject",
            value_shape="A\nB",
            value_constraint="x\ny",
            lc_default_literal="English\nFrench",
        ))
        text = converter.export_workspace(workspace.id)
        assert "A | B" in text
        assert "x | y" in text
        assert '"English\nFrench"' in text

    def test_tsv_export(self, converter, store, workspace):
        store.shapes.create(workspace.id, "Person")
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:name", note="a, b"))
        lines = converter.export_workspace(workspace.id, fmt="tsv").split("\n")
        assert lines[0].split("\t")[0] == "shapeID"
        assert "a, b" in lines[1].split("\t")

    def test_unsupported_format(self, converter, workspace):
        with pytest.raises(ValueError):
            converter.export_workspace(workspace.id, fmt="xlsx")

    def test_missing_workspace(self, converter):
        with pytest.raises(WorkspaceNotFoundError):
            converter.export_workspace("missing")

    def test_round_trip(self, converter, store):
        """Exported tables import back to the same shapes and rows."""
        original = converter.import_to_workspace(PERSON_BOOK_CSV, "Books")
        exported = converter.export_workspace(original.workspace_id)
        copy = converter.import_to_workspace(exported, "Books again")

        def snapshot(workspace_id):
            return {
                shape.shape_id: [row.data() for row in store.rows.list(workspace_id, shape.shape_id)]
                for shape in store.shapes.list(workspace_id)
            }

        assert snapshot(copy.workspace_id) == snapshot(original.workspace_id)

    def test_round_trip_multiline_lc_cells(self, converter, store, workspace):
        """Quoted newlines in LC columns stay inside their row on re-import."""
        store.shapes.create(workspace.id, "Person", label="Person")
        store.rows.create(workspace.id, "Person", StatementRow(
            property_id="foaf:name",
            lc_default_literal="Alpha\nBeta",
            lc_remark="First line\r\nSecond, with comma",
        ))
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:age"))

        copy = converter.import_to_workspace(converter.export_workspace(workspace.id), "People again")

        assert [s.shape_id for s in store.shapes.list(copy.workspace_id)] == ["Person"]
        rows = store.rows.list(copy.workspace_id, "Person")
        assert [r.property_id for r in rows] == ["foaf:name", "foaf:age"]
        assert rows[0].lc_default_literal == "Alpha\nBeta"
        assert rows[0].lc_remark == "First line\r\nSecond, with comma"

    def test_export_cached_until_mutation(self, converter, store, cache, workspace):
        store.shapes.create(workspace.id, "Person")
        first = converter.export_workspace(workspace.id)
        assert cache.get(CacheKind.CSV, workspace.id) == first
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:name"))
        assert "foaf:name" in converter.export_workspace(workspace.id)

    def test_export_to_file(self, converter, store, workspace, tmp_path):
        store.shapes.create(workspace.id, "Person")
        path = converter.export_to_file(workspace.id, tmp_path / "out" / "people.tsv", fmt="tsv")
        assert path.read_text(encoding="utf-8").startswith("shapeID\tshapeLabel")
