"""
Tests for DCTap row validation.

This module tests:
- Each structural rule of validate_row
- Shape validation with row positions
- Revalidation storing results on rows
"""

import json

import pytest

from dctap_converter.core.validators import RowValidator, validate_row
from dctap_converter.shared.models.dctap import StatementRow
from dctap_converter.shared.utilities.namespaces import DEFAULT_NAMESPACES


def _check(row, shapes=("Person",)):
    return validate_row(row, shapes, DEFAULT_NAMESPACES)


def _columns(issues):
    return [issue.column for issue in issues]


@pytest.mark.unit
class TestValidateRow:
    """Single-row rules."""

    def test_valid_literal_row(self):
        """A well-formed literal row has no issues."""
        result = _check(StatementRow(
            property_id="foaf:name", value_node_type="literal", value_data_type="xsd:string",
        ))
        assert result.valid
        assert result.warnings == []

    def test_missing_property_id_is_warning(self):
        """Data without a propertyId warns but stays valid."""
        result = _check(StatementRow(property_label="Name"))
        assert result.valid
        assert _columns(result.warnings) == ["propertyId"]

    def test_empty_row_has_no_issues(self):
        assert _check(StatementRow()).warnings == []

    def test_unknown_prefix_warning(self):
        result = _check(StatementRow(property_id="ex:name"))
        assert result.valid
        assert 'Unknown namespace prefix "ex"' in result.warnings[0].message

    def test_full_uri_warning(self):
        result = _check(StatementRow(property_id="http://schema.org/name"))
        assert "full URI" in result.warnings[0].message

    def test_node_type_case_insensitive(self):
        """IRI, iri and Literal are all accepted."""
        for node_type in ("IRI", "iri", "Literal", "bnode"):
            assert _check(StatementRow(property_id="a:b", value_node_type=node_type)).valid

    def test_invalid_node_type(self):
        result = _check(StatementRow(property_id="foaf:name", value_node_type="text"))
        assert _columns(result.errors) == ["valueNodeType"]

    def test_datatype_needs_literal(self):
        result = _check(StatementRow(
            property_id="foaf:name", value_node_type="IRI", value_data_type="xsd:string",
        ))
        assert _columns(result.errors) == ["valueDataType"]

    def test_unknown_datatype_warning(self):
        result = _check(StatementRow(property_id="foaf:name", value_data_type="xsd:weird"))
        assert result.valid
        assert _columns(result.warnings) == ["valueDataType"]

    def test_value_shape_with_literal(self):
        result = _check(StatementRow(
            property_id="foaf:knows", value_node_type="literal", value_shape="Person",
        ))
        assert _columns(result.errors) == ["valueShape"]

    def test_missing_value_shape(self):
        """Each encoded reference must name an existing shape."""
        result = _check(StatementRow(property_id="foaf:knows", value_shape="Person\nGhost"))
        assert len(result.errors) == 1
        assert "Ghost" in result.errors[0].message
        assert result.errors[0].message.endswith(": Ghost")

    def test_invalid_constraint_type(self):
        result = _check(StatementRow(property_id="foaf:name", value_constraint_type="regex"))
        assert _columns(result.errors) == ["valueConstraintType"]

    def test_valid_constraint_type(self):
        assert _check(StatementRow(property_id="foaf:name", value_constraint_type="picklist")).valid


@pytest.mark.unit
class TestRowValidator:
    """Store-backed validation."""

    @pytest.fixture
    def populated(self, store, workspace):
        store.shapes.create(workspace.id, "Person")
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:name", value_node_type="literal"))
        store.rows.create(workspace.id, "Person", StatementRow(property_id="foaf:knows", value_shape="Ghost"))
        return workspace.id

    def test_validate_shape_positions(self, store, populated):
        """Issues carry the 0-based row position."""
        result = RowValidator(store).validate_shape(populated, "Person")
        assert not result.valid
        assert [issue.row for issue in result.errors] == [1]

    def test_validate_does_not_store(self, store, populated):
        RowValidator(store).validate_shape(populated, "Person")
        assert not any(row.has_errors for row in store.rows.list(populated, "Person"))

    def test_revalidate_stores_results(self, store, populated):
        """Revalidation caches the outcome on each row."""
        RowValidator(store).revalidate_shape(populated, "Person")
        first, second = store.rows.list(populated, "Person")
        assert first.has_errors is False and first.error_details is None
        assert second.has_errors is True
        details = json.loads(second.error_details)
        assert details[0]["column"] == "valueShape"

    def test_revalidate_workspace(self, store, populated):
        store.shapes.create(populated, "Ghost")
        results = RowValidator(store).revalidate_workspace(populated)
        assert len(results) == 2
        assert all(result.valid for result in results)

    def test_validate_unsaved_row(self, store, populated):
        """validate_row loads shapes and namespaces from the store."""
        result = RowValidator(store).validate_row(populated, StatementRow(property_id="foaf:knows", value_shape="Person"))
        assert result.valid
