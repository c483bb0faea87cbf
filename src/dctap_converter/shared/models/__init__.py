"""
Shared data models.

This package contains the relational DCTap model, validation and result
types, and the structural shape classification used by all converters.
"""

from .dctap import (
    ROW_DATA_FIELDS,
    ROW_FIELD_KEYS,
    Folder,
    Namespace,
    Shape,
    StatementRow,
    Workspace,
    WorkspaceOptions,
)
from .results import (
    CSVImportResult,
    CSVParseResult,
    MarvaImportResult,
    ParsedRow,
    StartingPointImportResult,
)
from .shape_kind import (
    ClassifiedShape,
    ShapeKind,
    classify_shape,
    classify_shapes,
    is_profile_link,
    is_starting_point_shape,
    profile_links,
)
from .validation import Severity, ValidationIssue, ValidationResult

__all__ = [
    # DCTap model
    "ROW_DATA_FIELDS",
    "ROW_FIELD_KEYS",
    "Folder",
    "Namespace",
    "Shape",
    "StatementRow",
    "Workspace",
    "WorkspaceOptions",
    # Results
    "CSVImportResult",
    "CSVParseResult",
    "MarvaImportResult",
    "ParsedRow",
    "StartingPointImportResult",
    # Shape classification
    "ClassifiedShape",
    "ShapeKind",
    "classify_shape",
    "classify_shapes",
    "is_profile_link",
    "is_starting_point_shape",
    "profile_links",
    # Validation
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
