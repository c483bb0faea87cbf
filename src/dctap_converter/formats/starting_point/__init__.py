"""
LC Starting Point Import/Export Module

Usage:
    from dctap_converter.formats.starting_point import StartingPointConverter

    converter = StartingPointConverter(store)
    converter.import_file(workspace_id, "starting-points.json")
    data = converter.export_starting_points(workspace_id)
"""

from .starting_point_models import (
    StartingPointConfig,
    StartingPointMenuGroup,
    StartingPointMenuItem,
)

from .starting_point_converter import (
    StartingPointConverter,
    find_config,
    group_label,
    group_shape_id,
)

__all__ = [
    "StartingPointConfig",
    "StartingPointMenuGroup",
    "StartingPointMenuItem",
    "StartingPointConverter",
    "find_config",
    "group_label",
    "group_shape_id",
]
