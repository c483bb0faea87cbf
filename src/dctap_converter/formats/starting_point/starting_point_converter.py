"""
Starting Point Converter.

Maps LC starting-point menus onto ordinary shapes in the reserved
``Starting Points`` folder:

- each menu group becomes shape ``startingpoint:<group name>`` (whitespace
  replaced by underscores) labelled with the group name;
- each menu item becomes a ``dcterms:hasPart`` row holding the item label,
  its first type URI (valueConstraint, picklist) and its first resource
  template (valueShape);
- the index shape ``startingpoint:index`` records the group order, one row
  per group.

Re-importing replaces same-named groups and the index rather than merging.

Usage:
    from dctap_converter.formats.starting_point import StartingPointConverter

    converter = StartingPointConverter(store, cache=cache)
    result = converter.import_file(workspace_id, "starting-points.json")
    data = converter.export_starting_points(workspace_id)   # None if nothing to export
"""

import copy
import json
import logging
import re
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...constants import DCTapVocabulary, ShapeConventions
from ...core.cache import MISSING, CacheKind, ExportCache
from ...core.store.protocols import WorkspaceStore
from ...errors import InputFormatError, StartingPointFormatError, WorkspaceNotFoundError
from ...shared.models.dctap import Shape, StatementRow
from ...shared.models.results import StartingPointImportResult
from ...shared.models.shape_kind import is_starting_point_shape
from .starting_point_models import (
    StartingPointConfig,
    StartingPointMenuGroup,
    StartingPointMenuItem,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def group_shape_id(menu_group: str) -> str:
    """Shape id of a menu group: reserved prefix plus the name with whitespace as underscores."""
    return f"{ShapeConventions.STARTING_POINT_PREFIX}{_WHITESPACE.sub('_', menu_group)}"


def group_label(shape: Shape) -> str:
    """Menu group name of a shape: its label, else the id without prefix and underscores."""
    if shape.label:
        return shape.label
    return shape.shape_id.replace(ShapeConventions.STARTING_POINT_PREFIX, "", 1).replace("_", " ")


def find_config(data: Any, file_path: Optional[str] = None) -> StartingPointConfig:
    """
    Locate and validate the startingPoints config in decoded JSON.

    Raises:
        StartingPointFormatError: If no config is present or it has no groups.
    """
    items = data if isinstance(data, list) else [data]
    raw = next(
        (
            item for item in items
            if isinstance(item, dict) and item.get("configType") == ShapeConventions.STARTING_POINT_CONFIG_TYPE
        ),
        None,
    )
    if raw is None:
        raise StartingPointFormatError("No startingPoints config found in file", file_path=file_path)
    config = StartingPointConfig.from_dict(raw)
    if not config.menu_groups:
        raise StartingPointFormatError("No menu groups found in starting points config", file_path=file_path)
    return config


class StartingPointConverter:
    """
    Import and export LC starting-point menus.

    Example:
        >>> converter = StartingPointConverter(store)
        >>> result = converter.import_starting_points(workspace_id, data)
        >>> result.shapes_created
        3
    """

    def __init__(self, store: WorkspaceStore, cache: Optional[ExportCache] = None):
        """
        Initialize the converter.

        Args:
            store: Workspace store.
            cache: Optional export cache consulted by export_starting_points.
        """
        self.store = store
        self.cache = cache

    def _replace_shape(self, workspace_id: str, shape_id: str, label: str, folder_id: str) -> None:
        if self.store.shapes.get(workspace_id, shape_id) is not None:
            logger.debug(f"Replacing existing starting-point shape '{shape_id}'")
            self.store.shapes.delete(workspace_id, shape_id)
        self.store.shapes.create(workspace_id, shape_id, label=label, folder_id=folder_id)

    # ========================================================================
    # Import
    # ========================================================================

    def import_starting_points(self, workspace_id: str, data: Any) -> StartingPointImportResult:
        """
        Import a starting-points file into an existing workspace.

        Args:
            workspace_id: Target workspace.
            data: Decoded JSON, normally a single-element array.

        Returns:
            StartingPointImportResult; counts include the index shape and rows.

        Raises:
            StartingPointFormatError: If the file has no config or no groups.
            WorkspaceNotFoundError: If the workspace does not exist.
        """
        config = find_config(data)
        if self.store.workspaces.get(workspace_id) is None:
            raise WorkspaceNotFoundError(workspace_id)

        folder = self.store.folders.get_or_create(workspace_id, ShapeConventions.STARTING_POINT_FOLDER_NAME)
        result = StartingPointImportResult(folder_id=folder.id)
        created: List[StartingPointMenuGroup] = []

        for group in config.menu_groups:
            shape_id = group_shape_id(group.menu_group)
            self._replace_shape(workspace_id, shape_id, group.menu_group, folder.id)
            result.shapes_created += 1
            created.append(group)

            for order, item in enumerate(group.menu_items):
                self.store.rows.create(workspace_id, shape_id, StatementRow(
                    row_order=order,
                    property_id=ShapeConventions.HAS_PART_PROPERTY,
                    property_label=item.label,
                    value_node_type=DCTapVocabulary.IRI,
                    value_shape=item.use_resource_templates[0] if item.use_resource_templates else None,
                    value_constraint=item.type[0] if item.type else None,
                    value_constraint_type=DCTapVocabulary.PICKLIST,
                ))
                result.rows_created += 1
            logger.debug(f"Imported menu group '{group.menu_group}' ({len(group.menu_items)} items)")

        self._replace_shape(
            workspace_id,
            ShapeConventions.STARTING_POINT_INDEX_ID,
            ShapeConventions.STARTING_POINT_INDEX_LABEL,
            folder.id,
        )
        result.shapes_created += 1
        for order, group in enumerate(created):
            self.store.rows.create(workspace_id, ShapeConventions.STARTING_POINT_INDEX_ID, StatementRow(
                row_order=order,
                property_id=ShapeConventions.HAS_PART_PROPERTY,
                property_label=group.menu_group,
                value_shape=group_shape_id(group.menu_group),
            ))
            result.rows_created += 1

        logger.info(
            f"Imported {len(created)} starting-point groups into workspace {workspace_id}: "
            f"{result.shapes_created} shapes, {result.rows_created} rows"
        )
        return result

    def import_file(self, workspace_id: str, file_path: Union[str, Path]) -> StartingPointImportResult:
        """
        Import a starting-points JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            InputFormatError: If the file is not valid JSON.
            StartingPointFormatError: If the config or its groups are missing.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InputFormatError("Invalid JSON in starting points file", file_path=str(path), details=str(e)) from e
        try:
            return self.import_starting_points(workspace_id, data)
        except StartingPointFormatError as e:
            e.file_path = str(path)
            raise

    # ========================================================================
    # Export
    # ========================================================================

    def has_starting_points(self, workspace_id: str) -> bool:
        return any(is_starting_point_shape(s.shape_id) for s in self.store.shapes.list(workspace_id))

    def export_config(self, workspace_id: str) -> Optional[StartingPointConfig]:
        """
        Build the starting-points config of a workspace.

        Groups named by the index come first, in index order; other
        starting-point shapes follow in store order. Groups without
        menu items are left out.

        Returns:
            The config, or None when there is nothing to export.
        """
        shapes = self.store.shapes.list(workspace_id)
        groups = [
            s for s in shapes
            if is_starting_point_shape(s.shape_id) and s.shape_id != ShapeConventions.STARTING_POINT_INDEX_ID
        ]
        if not groups:
            return None

        ordered_ids: List[str] = []
        if any(s.shape_id == ShapeConventions.STARTING_POINT_INDEX_ID for s in shapes):
            for row in self.store.rows.list(workspace_id, ShapeConventions.STARTING_POINT_INDEX_ID):
                if row.value_shape and row.value_shape not in ordered_ids:
                    ordered_ids.append(row.value_shape)

        by_id: Dict[str, Shape] = {s.shape_id: s for s in groups}
        ordered = [by_id[shape_id] for shape_id in ordered_ids if shape_id in by_id]
        ordered.extend(s for s in groups if s.shape_id not in ordered_ids)

        menu_groups: List[StartingPointMenuGroup] = []
        for shape in ordered:
            items = [
                StartingPointMenuItem(
                    label=row.property_label or "",
                    type=[row.value_constraint] if row.value_constraint else [],
                    use_resource_templates=[row.value_shape] if row.value_shape else [],
                )
                for row in self.store.rows.list(workspace_id, shape.shape_id)
                if row.property_id == ShapeConventions.HAS_PART_PROPERTY
            ]
            if not items:
                logger.debug(f"Skipping starting-point shape '{shape.shape_id}': no menu items")
                continue
            menu_groups.append(StartingPointMenuGroup(group_label(shape), items))

        if not menu_groups:
            return None
        return StartingPointConfig(
            id=str(uuid.uuid4()),
            name="config",
            config_type=ShapeConventions.STARTING_POINT_CONFIG_TYPE,
            menu_groups=menu_groups,
        )

    def export_starting_points(self, workspace_id: str) -> Optional[List[Dict[str, Any]]]:
        """
        Export starting points as a single-element array, or None if there are none.

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist.
        """
        if self.cache is not None:
            cached = self.cache.get(CacheKind.STARTING_POINTS, workspace_id)
            if cached is not MISSING:
                logger.debug(f"Serving cached starting points for workspace {workspace_id}")
                return copy.deepcopy(cached)

        config = self.export_config(workspace_id)
        exported: Optional[List[Dict[str, Any]]] = None
        if config is None:
            logger.info(f"No starting points to export in workspace {workspace_id}")
        else:
            exported = [config.to_dict()]
            logger.info(f"Exported {len(config.menu_groups)} starting-point groups from workspace {workspace_id}")
        if self.cache is not None:
            self.cache.set(CacheKind.STARTING_POINTS, workspace_id, copy.deepcopy(exported))
        return exported

    def export_to_file(self, workspace_id: str, output_path: Union[str, Path]) -> Optional[Path]:
        """Write the export as JSON; returns None and writes nothing when there is nothing to export."""
        exported = self.export_starting_points(workspace_id)
        if exported is None:
            return None
        path = Path(output_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(exported, f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote starting points to {path}")
        return path
