"""
Row Validator.

Structural validation of DCTap statement rows. Converters never validate;
this pass runs separately and its result is cached on each row
(``has_errors`` / ``error_details``). Validation never blocks a write.

Rules:
1. Missing propertyId on a row with other data (warning)
2. Full URI or unknown prefix in propertyId (warning)
3. valueNodeType outside IRI / literal / bnode (error)
4. valueDataType with a non-literal valueNodeType (error)
5. Unknown valueDataType (warning)
6. valueShape with a literal valueNodeType (error)
7. valueShape referencing a missing shape (error)
8. valueConstraintType outside the vocabulary (error)

Usage:
    from dctap_converter.core.validators import RowValidator

    validator = RowValidator(store)
    result = validator.validate_shape(workspace_id, "Person")
    if not result.valid:
        for issue in result.errors:
            print(f"Row {issue.row}: {issue.message}")
"""

import json
import logging
from typing import Iterable, List, Optional, Sequence

from ...constants import DCTapVocabulary
from ...shared.models.dctap import Namespace, StatementRow
from ...shared.models.validation import ValidationResult
from ...shared.utilities.multivalue import decode
from ...shared.utilities.namespaces import prefix_of
from ..store.protocols import WorkspaceStore

logger = logging.getLogger(__name__)


# Fields whose presence makes a missing propertyId worth reporting.
_DATA_FIELDS = (
    "property_label",
    "mandatory",
    "repeatable",
    "value_node_type",
    "value_data_type",
    "value_shape",
    "value_constraint",
    "value_constraint_type",
    "note",
)

_NODE_TYPES_LOWER = {t.lower() for t in DCTapVocabulary.VALUE_NODE_TYPES}


def validate_row(
    row: StatementRow,
    existing_shapes: Iterable[str],
    namespaces: Sequence[Namespace],
) -> ValidationResult:
    """
    Validate a single row against the DCTap rules.

    Args:
        row: Row to validate.
        existing_shapes: Shape ids that valueShape may reference.
        namespaces: Workspace namespace table.

    Returns:
        ValidationResult with column-scoped issues.
    """
    result = ValidationResult()
    shapes = set(existing_shapes)
    prefixes = {ns.prefix for ns in namespaces}

    has_any_data = any(getattr(row, name) for name in _DATA_FIELDS)
    if not row.property_id and has_any_data:
        result.add_warning("Property ID is required", column="propertyId")

    prefix = prefix_of(row.property_id)
    if prefix is not None:
        if prefix in DCTapVocabulary.FULL_URI_PREFIXES:
            result.add_warning(
                f'Property ID "{row.property_id}" appears to be a full URI. '
                f'Consider using a prefixed form (e.g., dcterms:title) instead.',
                column="propertyId",
            )
        elif prefix not in prefixes:
            result.add_warning(
                f'Unknown namespace prefix "{prefix}" in property ID "{row.property_id}"',
                column="propertyId",
            )

    node_type = row.value_node_type.lower() if row.value_node_type else None
    if row.value_node_type and node_type not in _NODE_TYPES_LOWER:
        result.add_error(
            f"Invalid valueNodeType: {row.value_node_type}. "
            f"Must be one of: {', '.join(DCTapVocabulary.VALUE_NODE_TYPES)}",
            column="valueNodeType",
        )

    if row.value_data_type and node_type and node_type != DCTapVocabulary.LITERAL:
        result.add_error(
            'valueDataType can only be used when valueNodeType is "literal"',
            column="valueDataType",
        )

    if row.value_data_type and row.value_data_type not in DCTapVocabulary.DATATYPES:
        result.add_warning(
            f"Unknown datatype: {row.value_data_type}. "
            f"Common types: {', '.join(DCTapVocabulary.DATATYPES[:5])}...",
            column="valueDataType",
        )

    if row.value_shape and node_type == DCTapVocabulary.LITERAL:
        result.add_error(
            'valueShape cannot be used when valueNodeType is "literal"',
            column="valueShape",
        )

    if row.value_shape:
        missing = [ref for ref in decode(row.value_shape) if ref not in shapes]
        if missing:
            result.add_error(
                f"valueShape references non-existent shape(s): {', '.join(missing)}",
                column="valueShape",
            )

    if row.value_constraint_type and row.value_constraint_type not in DCTapVocabulary.VALUE_CONSTRAINT_TYPES:
        result.add_error(
            f"Invalid valueConstraintType: {row.value_constraint_type}. "
            f"Must be one of: {', '.join(DCTapVocabulary.VALUE_CONSTRAINT_TYPES)}",
            column="valueConstraintType",
        )

    return result


class RowValidator:
    """Runs the row rules against rows held in a workspace store."""

    def __init__(self, store: WorkspaceStore):
        self.store = store

    def validate_row(
        self,
        workspace_id: str,
        row: StatementRow,
        existing_shapes: Optional[Iterable[str]] = None,
        namespaces: Optional[Sequence[Namespace]] = None,
    ) -> ValidationResult:
        """Validate one row, loading shapes and namespaces when not supplied."""
        if existing_shapes is None:
            existing_shapes = [s.shape_id for s in self.store.shapes.list(workspace_id)]
        if namespaces is None:
            namespaces = self.store.namespaces.list(workspace_id)
        return validate_row(row, existing_shapes, namespaces)

    def validate_rows(
        self, workspace_id: str, rows: Sequence[StatementRow]
    ) -> ValidationResult:
        """Validate rows as one shape; issues carry the row's position."""
        shapes = [s.shape_id for s in self.store.shapes.list(workspace_id)]
        namespaces = self.store.namespaces.list(workspace_id)
        combined = ValidationResult()
        for i, row in enumerate(rows):
            combined.merge(validate_row(row, shapes, namespaces), row=i)
        return combined

    def validate_shape(self, workspace_id: str, shape_id: str) -> ValidationResult:
        return self.validate_rows(workspace_id, self.store.rows.list(workspace_id, shape_id))

    def revalidate_shape(self, workspace_id: str, shape_id: str) -> ValidationResult:
        """Validate a shape and store each row's result on the row."""
        shapes = [s.shape_id for s in self.store.shapes.list(workspace_id)]
        namespaces = self.store.namespaces.list(workspace_id)
        rows = self.store.rows.list(workspace_id, shape_id)
        combined = ValidationResult()
        for i, row in enumerate(rows):
            result = validate_row(row, shapes, namespaces)
            combined.merge(result, row=i)
            issues = [issue.to_dict() for issue in result.errors + result.warnings]
            details = json.dumps(issues) if issues else None
            if row.id is not None:
                self.store.rows.update_errors(workspace_id, shape_id, row.id, not result.valid, details)
        logger.debug(
            f"Revalidated shape '{shape_id}': {len(combined.errors)} errors, {len(combined.warnings)} warnings"
        )
        return combined

    def revalidate_workspace(self, workspace_id: str) -> List[ValidationResult]:
        """Revalidate every shape; results follow the shape list order."""
        return [
            self.revalidate_shape(workspace_id, shape.shape_id)
            for shape in self.store.shapes.list(workspace_id)
        ]
