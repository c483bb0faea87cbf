"""
Marva Profile Data Models.

This module defines the structures of Marva (Sinopia-style) profile JSON
documents as exchanged with the LC editor.

Models:
- MarvaDefault: default literal and/or URI of a property
- MarvaValueConstraint: refs, lookups, defaults and datatype of a property
- MarvaPropertyTemplate: one property of a resource template
- MarvaResourceTemplate: a resource template (one shape)
- MarvaProfile: profile bundling resource templates
- MarvaProfileDocument: the top-level stored document
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MarvaPropertyType(Enum):
    """Property template types understood by the converter."""
    LITERAL = "literal"
    RESOURCE = "resource"
    LOOKUP = "lookup"
    LIST = "list"


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass
class MarvaDefault:
    """A default value; either side may be missing."""
    default_uri: Optional[str] = None
    default_literal: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarvaDefault":
        return cls(default_uri=data.get("defaultURI"), default_literal=data.get("defaultLiteral"))

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary format, omitting missing sides."""
        result: Dict[str, str] = {}
        if self.default_uri:
            result["defaultURI"] = self.default_uri
        if self.default_literal:
            result["defaultLiteral"] = self.default_literal
        return result


@dataclass
class MarvaValueConstraint:
    """
    Value constraint of a property template.

    ``value_template_refs`` and ``use_values_from`` keep the raw elements;
    some producers put several comma-separated values into one element.

    Attributes:
        value_template_refs: Referenced resource template ids.
        use_values_from: Lookup vocabularies.
        defaults: Default values.
        data_type_uri: ``valueDataType.dataTypeURI``.
        editable: Passed through from the source, not imported.
        repeatable: Fallback for the property's own repeatable flag.
        value_language: Passed through from the source, not imported.
    """
    value_template_refs: List[Any] = field(default_factory=list)
    use_values_from: List[Any] = field(default_factory=list)
    defaults: List[MarvaDefault] = field(default_factory=list)
    data_type_uri: Optional[str] = None
    editable: Optional[str] = None
    repeatable: Optional[str] = None
    value_language: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MarvaValueConstraint":
        if not isinstance(data, dict):
            return cls()
        data_type = data.get("valueDataType")
        return cls(
            value_template_refs=_as_list(data.get("valueTemplateRefs")),
            use_values_from=_as_list(data.get("useValuesFrom")),
            defaults=[MarvaDefault.from_dict(d) for d in _as_list(data.get("defaults")) if isinstance(d, dict)],
            data_type_uri=data_type.get("dataTypeURI") if isinstance(data_type, dict) else None,
            editable=data.get("editable"),
            repeatable=data.get("repeatable"),
            value_language=data.get("valueLanguage"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "valueTemplateRefs": list(self.value_template_refs),
            "useValuesFrom": list(self.use_values_from),
            "defaults": [d.to_dict() for d in self.defaults],
            "valueDataType": {"dataTypeURI": self.data_type_uri} if self.data_type_uri else {},
        }
        if self.editable is not None:
            result["editable"] = self.editable
        if self.repeatable is not None:
            result["repeatable"] = self.repeatable
        if self.value_language is not None:
            result["valueLanguage"] = self.value_language
        return result


@dataclass
class MarvaPropertyTemplate:
    """
    A property template.

    ``mandatory`` and ``repeatable`` are the strings ``"true"``/``"false"``.
    """
    property_uri: str = ""
    property_label: str = ""
    mandatory: Optional[str] = None
    repeatable: Optional[str] = None
    type: str = MarvaPropertyType.LITERAL.value
    remark: Optional[str] = None
    value_constraint: MarvaValueConstraint = field(default_factory=MarvaValueConstraint)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarvaPropertyTemplate":
        return cls(
            property_uri=data.get("propertyURI") or "",
            property_label=data.get("propertyLabel") or "",
            mandatory=data.get("mandatory"),
            repeatable=data.get("repeatable"),
            type=data.get("type") or MarvaPropertyType.LITERAL.value,
            remark=data.get("remark"),
            value_constraint=MarvaValueConstraint.from_dict(data.get("valueConstraint")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "propertyURI": self.property_uri,
            "propertyLabel": self.property_label,
            "mandatory": self.mandatory or "false",
            "repeatable": self.repeatable or "false",
            "type": self.type,
            "resourceTemplates": [],
            "valueConstraint": self.value_constraint.to_dict(),
        }
        if self.remark:
            result["remark"] = self.remark
        return result


@dataclass
class MarvaResourceTemplate:
    """A resource template; maps to one shape."""
    id: str
    resource_uri: Optional[str] = None
    resource_label: Optional[str] = None
    remark: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    property_templates: List[MarvaPropertyTemplate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarvaResourceTemplate":
        return cls(
            id=data.get("id") or "",
            resource_uri=data.get("resourceURI"),
            resource_label=data.get("resourceLabel"),
            remark=data.get("remark"),
            author=data.get("author"),
            date=data.get("date"),
            property_templates=[
                MarvaPropertyTemplate.from_dict(p)
                for p in _as_list(data.get("propertyTemplates"))
                if isinstance(p, dict)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"id": self.id}
        if self.resource_uri:
            result["resourceURI"] = self.resource_uri
        if self.resource_label:
            result["resourceLabel"] = self.resource_label
        if self.remark:
            result["remark"] = self.remark
        if self.author:
            result["author"] = self.author
        if self.date:
            result["date"] = self.date
        result["propertyTemplates"] = [p.to_dict() for p in self.property_templates]
        return result


@dataclass
class MarvaProfile:
    """A profile: one top-level shape plus its resource templates."""
    id: str
    title: str = ""
    description: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    resource_templates: List[MarvaResourceTemplate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarvaProfile":
        return cls(
            id=data.get("id") or "",
            title=data.get("title") or "",
            description=data.get("description"),
            author=data.get("author"),
            date=data.get("date"),
            resource_templates=[
                MarvaResourceTemplate.from_dict(rt)
                for rt in _as_list(data.get("resourceTemplates"))
                if isinstance(rt, dict)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"id": self.id, "title": self.title}
        if self.description:
            result["description"] = self.description
        if self.author:
            result["author"] = self.author
        if self.date:
            result["date"] = self.date
        result["resourceTemplates"] = [rt.to_dict() for rt in self.resource_templates]
        return result


@dataclass
class MarvaProfileDocument:
    """
    A stored Marva profile document.

    Attributes:
        id: Document id (a fresh uuid4 on export).
        name: Display name, the profile title on export.
        profile: ``json.Profile``; None when the document carries no profile.
        config_type: Always ``"profile"`` for profile documents.
        metadata: createDate/updateDate and optional users.
        created: Creation timestamp.
        modified: Modification timestamp.
    """
    id: str
    name: str
    profile: Optional[MarvaProfile] = None
    config_type: str = "profile"
    metadata: Dict[str, Any] = field(default_factory=dict)
    created: str = ""
    modified: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarvaProfileDocument":
        body = data.get("json")
        profile_data = body.get("Profile") if isinstance(body, dict) else None
        metadata = data.get("metadata")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            profile=MarvaProfile.from_dict(profile_data) if isinstance(profile_data, dict) else None,
            config_type=data.get("configType") or "profile",
            metadata=metadata if isinstance(metadata, dict) else {},
            created=data.get("created") or "",
            modified=data.get("modified") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "name": self.name,
            "configType": self.config_type,
            "json": {"Profile": self.profile.to_dict() if self.profile else None},
            "metadata": dict(self.metadata),
            "created": self.created,
            "modified": self.modified,
        }
