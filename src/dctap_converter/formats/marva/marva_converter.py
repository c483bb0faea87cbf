"""
Marva Profile Converter.

Converts between workspaces and Marva profile JSON documents.

Import process:
1. Create the workspace and enable the LC extension columns
2. For each document with a Profile, create the profile shape
3. Create one shape per resource template, one row per property template
4. Link the profile shape to its templates with ``dcterms:hasPart`` /
   ``Has Shape`` rows, in template order

Export process:
1. Drop starting-point shapes and shapes in the Starting Points folder
2. Classify the rest; every profile container becomes one document whose
   resource templates are its linked shapes, in link order
3. Without any profile container, wrap all remaining shapes in one
   synthesized profile

Property template <-> row mapping:
    propertyURI                   <-> propertyId (compressed / expanded)
    type literal                  <-> valueNodeType literal
    type resource|list + refs     <-> valueNodeType bnode, valueShape
    type lookup + useValuesFrom   <-> valueConstraintType IRIstem, valueConstraint
    valueDataType.dataTypeURI     <-> lcDataTypeURI
    defaults[]                    <-> lcDefaultLiteral / lcDefaultURI (paired by position)
    remark                        <-> lcRemark

Usage:
    from dctap_converter.formats.marva import MarvaProfileConverter

    converter = MarvaProfileConverter(store, cache=cache)
    result = converter.import_file("profiles.json", "LC Profiles")
    documents = converter.export_profiles(result.workspace_id)
"""

import copy
import json
import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tqdm import tqdm

from ...constants import DCTapVocabulary, ProgressConfig, ShapeConventions
from ...core.cache import MISSING, CacheKind, ExportCache
from ...core.store.protocols import WorkspaceStore
from ...errors import InputFormatError, WorkspaceNotFoundError
from ...shared.models.dctap import Shape, StatementRow
from ...shared.models.results import MarvaImportResult
from ...shared.models.shape_kind import ShapeKind, classify_shapes
from ...shared.utilities.multivalue import (
    decode,
    encode_or_none,
    flatten,
    pair_defaults,
    split_defaults,
)
from ...shared.utilities.namespaces import NamespaceResolver
from .folder_classifier import classify_folder
from .marva_models import (
    MarvaDefault,
    MarvaProfile,
    MarvaProfileDocument,
    MarvaPropertyTemplate,
    MarvaPropertyType,
    MarvaResourceTemplate,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def _timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_documents(data: Any, file_path: Optional[str] = None) -> List[MarvaProfileDocument]:
    """
    Build profile documents from decoded JSON.

    Accepts an array of documents or a single document object.

    Raises:
        InputFormatError: If the input is neither.
    """
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise InputFormatError(
            "Marva profile input must be a JSON array of documents or a single document",
            file_path=file_path,
        )
    documents: List[MarvaProfileDocument] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InputFormatError(
                f"Profile document at index {index} is not a JSON object",
                file_path=file_path,
            )
        documents.append(MarvaProfileDocument.from_dict(item))
    return documents


# ============================================================================
# Row <-> property template mapping
# ============================================================================

def property_template_to_row(
    prop: MarvaPropertyTemplate, row_order: int, resolver: NamespaceResolver
) -> StatementRow:
    """Convert one property template to a statement row."""
    vc = prop.value_constraint
    row = StatementRow(
        row_order=row_order,
        property_id=resolver.compress(prop.property_uri) or None,
        property_label=prop.property_label or None,
        mandatory=prop.mandatory or None,
        repeatable=prop.repeatable or vc.repeatable or "false",
        lc_remark=prop.remark or None,
    )

    if prop.type == MarvaPropertyType.LITERAL.value:
        row.value_node_type = DCTapVocabulary.LITERAL
    elif prop.type in (MarvaPropertyType.RESOURCE.value, MarvaPropertyType.LIST.value):
        refs = flatten(vc.value_template_refs)
        if refs:
            row.value_node_type = DCTapVocabulary.BNODE
            row.value_shape = encode_or_none(refs)
    elif prop.type == MarvaPropertyType.LOOKUP.value:
        values = flatten(vc.use_values_from)
        if values:
            row.value_constraint_type = DCTapVocabulary.IRI_STEM
            row.value_constraint = encode_or_none(values)

    if vc.data_type_uri:
        row.lc_data_type_uri = resolver.compress(vc.data_type_uri)

    if vc.defaults:
        row.lc_default_literal, row.lc_default_uri = split_defaults(d.to_dict() for d in vc.defaults)

    return row


def row_to_property_template(row: StatementRow, resolver: NamespaceResolver) -> MarvaPropertyTemplate:
    """
    Convert a statement row back to a property template.

    Type inference order: literal node type, then bnode with valueShape,
    then IRIstem with a constraint, then any valueShape, else literal. A
    row with both valueShape and an IRIstem constraint but no bnode node
    type therefore exports as a lookup.
    """
    prop = MarvaPropertyTemplate(
        property_uri=resolver.expand(row.property_id or "") or "",
        property_label=row.property_label or "",
        mandatory=row.mandatory or "false",
        repeatable=row.repeatable or "false",
        type=MarvaPropertyType.LITERAL.value,
        remark=row.lc_remark or None,
    )
    vc = prop.value_constraint

    if row.value_node_type == DCTapVocabulary.LITERAL:
        prop.type = MarvaPropertyType.LITERAL.value
    elif row.value_node_type == DCTapVocabulary.BNODE and row.value_shape:
        prop.type = MarvaPropertyType.RESOURCE.value
        vc.value_template_refs = decode(row.value_shape)
    elif row.value_constraint_type == DCTapVocabulary.IRI_STEM and row.value_constraint:
        prop.type = MarvaPropertyType.LOOKUP.value
        vc.use_values_from = decode(row.value_constraint)
    elif row.value_shape:
        prop.type = MarvaPropertyType.RESOURCE.value
        vc.value_template_refs = decode(row.value_shape)

    if row.lc_data_type_uri:
        vc.data_type_uri = resolver.expand(row.lc_data_type_uri)

    vc.defaults = [
        MarvaDefault(default_uri=d.get("defaultURI"), default_literal=d.get("defaultLiteral"))
        for d in pair_defaults(row.lc_default_literal, row.lc_default_uri)
    ]
    return prop


def _wrap_document(profile: MarvaProfile, name: str) -> MarvaProfileDocument:
    now = _timestamp()
    return MarvaProfileDocument(
        id=str(uuid.uuid4()),
        name=name,
        profile=profile,
        config_type=ShapeConventions.PROFILE_CONFIG_TYPE,
        metadata={"createDate": now, "updateDate": now},
        created=now,
        modified=now,
    )


class MarvaProfileConverter:
    """
    Import and export Marva profile documents.

    Example:
        >>> converter = MarvaProfileConverter(store)
        >>> result = converter.import_profiles("Profiles", documents)
        >>> print(result.get_summary())
    """

    def __init__(self, store: WorkspaceStore, cache: Optional[ExportCache] = None):
        """
        Initialize the converter.

        Args:
            store: Workspace store.
            cache: Optional export cache consulted by export_profiles.
        """
        self.store = store
        self.cache = cache

    # ========================================================================
    # Import
    # ========================================================================

    def import_profiles(
        self, workspace_name: str, documents: List[MarvaProfileDocument]
    ) -> MarvaImportResult:
        """
        Import profile documents into a new workspace.

        Shapes and rows are created in document order. A failure part way
        through leaves what was already created in place.

        Args:
            workspace_name: Name of the workspace to create.
            documents: Parsed profile documents.

        Returns:
            MarvaImportResult with shape and row counts across all documents.
        """
        workspace = self.store.workspaces.create(workspace_name)
        self.store.options.update(workspace.id, {"useLCColumns": True})
        resolver = NamespaceResolver(self.store.namespaces.list(workspace.id))

        result = MarvaImportResult(workspace_id=workspace.id, workspace_name=workspace.name)
        folder_ids: Dict[str, str] = {}

        def folder_for(shape_id: str) -> Optional[str]:
            name = classify_folder(shape_id)
            if name is None:
                return None
            if name not in folder_ids:
                folder_ids[name] = self.store.folders.get_or_create(workspace.id, name).id
            return folder_ids[name]

        for doc in documents:
            profile = doc.profile
            if profile is None or not profile.id:
                logger.warning(f"Skipping document '{doc.name or doc.id}': no Profile")
                result.skipped_documents.append(doc.name or doc.id)
                continue

            self.store.shapes.create(
                workspace.id,
                profile.id,
                label=profile.title,
                folder_id=folder_for(profile.id),
                description=profile.description,
            )
            result.shapes_created += 1

            for rt in tqdm(
                profile.resource_templates,
                desc=f"Importing {profile.id}",
                unit="template",
                disable=len(profile.resource_templates) < ProgressConfig.MIN_ITEMS_FOR_PROGRESS,
            ):
                self.store.shapes.create(
                    workspace.id,
                    rt.id,
                    label=rt.resource_label,
                    resource_uri=resolver.compress(rt.resource_uri),
                    folder_id=folder_for(rt.id),
                    description=rt.remark,
                )
                result.shapes_created += 1
                for order, prop in enumerate(rt.property_templates):
                    self.store.rows.create(workspace.id, rt.id, property_template_to_row(prop, order, resolver))
                    result.rows_created += 1
                logger.debug(f"Imported resource template '{rt.id}' ({len(rt.property_templates)} properties)")

            for order, rt in enumerate(profile.resource_templates):
                self.store.rows.create(workspace.id, profile.id, StatementRow(
                    row_order=order,
                    property_id=ShapeConventions.HAS_PART_PROPERTY,
                    property_label=ShapeConventions.HAS_SHAPE_LABEL,
                    value_node_type=DCTapVocabulary.BNODE,
                    value_shape=rt.id,
                ))
                result.rows_created += 1

        logger.info(
            f"Imported Marva profiles into '{workspace.name}': "
            f"{result.shapes_created} shapes, {result.rows_created} rows"
        )
        return result

    def import_file(self, file_path: Union[str, Path], workspace_name: str) -> MarvaImportResult:
        """
        Import a JSON file holding a document array or a single document.

        Raises:
            FileNotFoundError: If the file does not exist.
            InputFormatError: If the file is not valid profile JSON.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InputFormatError("Invalid JSON in profile file", file_path=str(path), details=str(e)) from e
        return self.import_profiles(workspace_name, parse_documents(data, str(path)))

    # ========================================================================
    # Export
    # ========================================================================

    def _resource_template(
        self, workspace_id: str, shape: Shape, resolver: NamespaceResolver
    ) -> MarvaResourceTemplate:
        rows = self.store.rows.list(workspace_id, shape.shape_id)
        return MarvaResourceTemplate(
            id=shape.shape_id,
            resource_uri=resolver.expand(shape.resource_uri) if shape.resource_uri else None,
            resource_label=shape.label or None,
            remark=shape.description or None,
            property_templates=[row_to_property_template(row, resolver) for row in rows],
        )

    def export_documents(self, workspace_id: str) -> List[MarvaProfileDocument]:
        """
        Build profile documents for a workspace.

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist.
        """
        workspace = self.store.workspaces.get(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)

        resolver = NamespaceResolver(self.store.namespaces.list(workspace_id))
        folder = self.store.folders.get_by_name(workspace_id, ShapeConventions.STARTING_POINT_FOLDER_NAME)
        classified = classify_shapes(
            self.store.shapes.list(workspace_id),
            lambda shape_id: self.store.rows.list(workspace_id, shape_id),
            folder.id if folder else None,
        )
        content = [c for c in classified if c.is_profile_content]
        shapes_by_id = {c.shape_id: c.shape for c in content}

        documents: List[MarvaProfileDocument] = []
        for container in content:
            if container.kind != ShapeKind.PROFILE_CONTAINER:
                continue
            shape = container.shape
            profile = MarvaProfile(
                id=shape.shape_id,
                title=shape.label or shape.shape_id,
                description=shape.description or None,
            )
            for rt_id in container.links:
                rt_shape = shapes_by_id.get(rt_id)
                if rt_shape is None:
                    logger.warning(f"Profile '{shape.shape_id}' links to missing shape '{rt_id}', skipping")
                    continue
                profile.resource_templates.append(self._resource_template(workspace_id, rt_shape, resolver))
            documents.append(_wrap_document(profile, profile.title))

        if not documents and content:
            logger.info(f"No profile shapes in workspace '{workspace.name}', exporting all shapes as one profile")
            profile = MarvaProfile(
                id=f"lc:profile:{_WHITESPACE.sub('_', workspace.name.lower())}",
                title=workspace.name,
            )
            for item in content:
                profile.resource_templates.append(self._resource_template(workspace_id, item.shape, resolver))
            documents.append(_wrap_document(profile, workspace.name))

        logger.info(f"Exported {len(documents)} Marva profile document(s) from workspace {workspace_id}")
        return documents

    def export_profiles(self, workspace_id: str) -> List[Dict[str, Any]]:
        """
        Export a workspace as a list of Marva profile document dictionaries.

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist.
        """
        if self.cache is not None:
            cached = self.cache.get(CacheKind.MARVA, workspace_id)
            if cached is not MISSING:
                logger.debug(f"Serving cached Marva export for workspace {workspace_id}")
                return copy.deepcopy(cached)

        exported = [doc.to_dict() for doc in self.export_documents(workspace_id)]
        if self.cache is not None:
            self.cache.set(CacheKind.MARVA, workspace_id, copy.deepcopy(exported))
        return exported

    def export_to_file(self, workspace_id: str, output_path: Union[str, Path]) -> Path:
        """Export a workspace and write the document array as JSON."""
        path = Path(output_path)
        documents = self.export_profiles(workspace_id)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(documents, f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote {len(documents)} profile document(s) to {path}")
        return path
