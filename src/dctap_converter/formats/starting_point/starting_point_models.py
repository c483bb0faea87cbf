"""
LC Starting Point Data Models.

A starting-points file is a single-element array holding one config:

    [{"id": "...", "name": "config", "configType": "startingPoints",
      "json": [{"menuGroup": "Monograph",
                "menuItems": [{"label": "Instance",
                               "type": ["http://id.loc.gov/ontologies/bibframe/Instance"],
                               "useResourceTemplates": ["lc:RT:bf2:Monograph:Instance"]}]}]}]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


def _strings(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


@dataclass
class StartingPointMenuItem:
    """One menu entry; only the first type and template are imported."""
    label: str
    type: List[str] = field(default_factory=list)
    use_resource_templates: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StartingPointMenuItem":
        return cls(
            label=str(data.get("label") or ""),
            type=_strings(data.get("type")),
            use_resource_templates=_strings(data.get("useResourceTemplates")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "label": self.label,
            "type": list(self.type),
            "useResourceTemplates": list(self.use_resource_templates),
        }


@dataclass
class StartingPointMenuGroup:
    """A named group of menu items."""
    menu_group: str
    menu_items: List[StartingPointMenuItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StartingPointMenuGroup":
        items = data.get("menuItems")
        return cls(
            menu_group=str(data.get("menuGroup") or ""),
            menu_items=[
                StartingPointMenuItem.from_dict(item)
                for item in (items if isinstance(items, list) else [])
                if isinstance(item, dict)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {"menuGroup": self.menu_group, "menuItems": [item.to_dict() for item in self.menu_items]}


@dataclass
class StartingPointConfig:
    """The ``startingPoints`` config element of a starting-points file."""
    id: str
    name: str = "config"
    config_type: str = "startingPoints"
    menu_groups: List[StartingPointMenuGroup] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StartingPointConfig":
        groups = data.get("json")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or "config"),
            config_type=str(data.get("configType") or ""),
            menu_groups=[
                StartingPointMenuGroup.from_dict(group)
                for group in (groups if isinstance(groups, list) else [])
                if isinstance(group, dict)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "name": self.name,
            "configType": self.config_type,
            "json": [group.to_dict() for group in self.menu_groups],
        }
