"""
DCTap Data Models.

This module defines the relational model shared by the store and every
format converter.

Models:
- Workspace: isolated container of namespaces, folders and shapes
- Namespace: prefix/URI pair scoped to a workspace
- Folder: named grouping of shapes
- Shape: entity type / resource template
- StatementRow: one property-constraint statement of a shape
- WorkspaceOptions: per-workspace feature flags
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional


# Python attribute -> external (camelCase) key for the DCTap statement fields.
ROW_FIELD_KEYS: Dict[str, str] = {
    "property_id": "propertyId",
    "property_label": "propertyLabel",
    "mandatory": "mandatory",
    "repeatable": "repeatable",
    "value_node_type": "valueNodeType",
    "value_data_type": "valueDataType",
    "value_shape": "valueShape",
    "value_constraint": "valueConstraint",
    "value_constraint_type": "valueConstraintType",
    "note": "note",
    "lc_default_literal": "lcDefaultLiteral",
    "lc_default_uri": "lcDefaultURI",
    "lc_data_type_uri": "lcDataTypeURI",
    "lc_remark": "lcRemark",
}

ROW_DATA_FIELDS: List[str] = list(ROW_FIELD_KEYS)


@dataclass
class Workspace:
    """
    Represents a workspace.

    Attributes:
        id: Opaque workspace identifier (uuid4 string).
        name: Display name.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 timestamp of the last mutation.
    """
    id: str
    name: str
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Namespace:
    """A prefix bound to a namespace URI."""
    prefix: str
    uri: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {"prefix": self.prefix, "namespace": self.uri}


@dataclass
class Folder:
    """A named folder grouping shapes."""
    id: str
    name: str
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {"id": self.id, "name": self.name, "createdAt": self.created_at}


@dataclass
class Shape:
    """
    Represents a shape (entity type / resource template).

    Attributes:
        shape_id: Unique id within the workspace, also the target of valueShape references.
        label: Display label.
        description: Free-text description.
        resource_uri: Prefixed name or full URI of the described class.
        folder_id: Optional folder assignment.
    """
    shape_id: str
    label: Optional[str] = None
    description: Optional[str] = None
    resource_uri: Optional[str] = None
    folder_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "shapeId": self.shape_id,
            "shapeLabel": self.label,
            "description": self.description,
            "resourceURI": self.resource_uri,
            "folderId": self.folder_id,
        }


@dataclass
class StatementRow:
    """
    Represents one DCTap statement row.

    All statement fields are kept as strings; ``mandatory`` and
    ``repeatable`` hold ``"true"``/``"false"`` verbatim. ``None`` means the
    cell is empty.

    Attributes:
        id: Store-assigned row id (None until persisted).
        row_order: Presentation order within the shape (None appends).
        has_errors: Cached result of the last validation pass.
        error_details: Serialized issues from the last validation pass.
    """
    id: Optional[int] = None
    row_order: Optional[int] = None
    property_id: Optional[str] = None
    property_label: Optional[str] = None
    mandatory: Optional[str] = None
    repeatable: Optional[str] = None
    value_node_type: Optional[str] = None
    value_data_type: Optional[str] = None
    value_shape: Optional[str] = None
    value_constraint: Optional[str] = None
    value_constraint_type: Optional[str] = None
    note: Optional[str] = None
    lc_default_literal: Optional[str] = None
    lc_default_uri: Optional[str] = None
    lc_data_type_uri: Optional[str] = None
    lc_remark: Optional[str] = None
    has_errors: bool = False
    error_details: Optional[str] = None

    def has_data(self) -> bool:
        """True if any statement field holds a non-empty value."""
        return any(getattr(self, name) for name in ROW_DATA_FIELDS)

    def data(self) -> Dict[str, Optional[str]]:
        """Return the statement fields keyed by attribute name."""
        return {name: getattr(self, name) for name in ROW_DATA_FIELDS}

    def copy(self, **changes: Any) -> "StatementRow":
        """Return a copy, optionally with some fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatementRow":
        """Build a row from camelCase or snake_case keys; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        camel_to_attr = {v: k for k, v in ROW_FIELD_KEYS.items()}
        camel_to_attr.update({"rowOrder": "row_order", "hasErrors": "has_errors", "errorDetails": "error_details"})
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = camel_to_attr.get(key, key)
            if attr in known:
                kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"id": self.id, "rowOrder": self.row_order}
        for name, key in ROW_FIELD_KEYS.items():
            result[key] = getattr(self, name)
        result["hasErrors"] = self.has_errors
        result["errorDetails"] = self.error_details
        return result


@dataclass
class WorkspaceOptions:
    """Per-workspace feature flags."""
    use_lc_columns: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkspaceOptions":
        """Create options from their stored key/value form."""
        extra = {k: v for k, v in data.items() if k != "useLCColumns"}
        return cls(use_lc_columns=bool(data.get("useLCColumns", False)), extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = dict(self.extra)
        result["useLCColumns"] = self.use_lc_columns
        return result
