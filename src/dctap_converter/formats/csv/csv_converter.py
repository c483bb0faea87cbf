"""
CSV/TSV Converter.

Imports DCTap tables into a new workspace and exports a workspace back to
a table.

Import process:
1. Parse the text (see csv_parser)
2. Group rows by shape in order of first appearance
3. Create the workspace, its shapes and their rows
4. Create placeholder namespaces for unknown propertyID prefixes

Export layout:
- Fixed column order (TabularFormat.EXPORT_HEADERS)
- Only the first row of a shape carries shapeID, shapeLabel and resourceURI
- A shape without rows is still written as one identity-only line
- valueShape and valueConstraint render embedded newlines as `` | ``

Usage:
    from dctap_converter.formats.csv import CSVConverter

    converter = CSVConverter(store, cache=cache)
    result = converter.import_to_workspace(content, "My Profiles")
    print(result.get_summary())

    text = converter.export_workspace(result.workspace_id, fmt="tsv")
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from ...constants import DCTapVocabulary, ProgressConfig, ShapeConventions, TabularFormat
from ...core.cache import MISSING, CacheKind, ExportCache
from ...core.store.protocols import WorkspaceStore
from ...errors import InputFormatError, WorkspaceNotFoundError
from ...shared.models.dctap import ROW_DATA_FIELDS, StatementRow
from ...shared.models.results import CSVImportResult, CSVParseResult
from ...shared.models.validation import Severity, ValidationIssue
from ...shared.utilities.multivalue import newlines_to_pipes
from ...shared.utilities.namespaces import placeholder_uri, prefix_of
from .csv_parser import CSVParser

logger = logging.getLogger(__name__)


# Statement columns whose newlines become pipes on export.
_PIPED_FIELDS = ("value_shape", "value_constraint")


def escape_value(value: Optional[str], delimiter: str, convert_newlines_to_pipes: bool = False) -> str:
    """
    Render one cell.

    The cell is quoted, with inner quotes doubled, when it contains the
    delimiter, a quote or a newline.
    """
    if value is None:
        return ""
    text = str(value)
    if convert_newlines_to_pipes:
        text = newlines_to_pipes(text) or ""
    if delimiter in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


@dataclass
class _ShapeGroup:
    label: Optional[str]
    resource_uri: Optional[str]
    rows: List[StatementRow] = field(default_factory=list)


class CSVConverter:
    """
    Import and export DCTap CSV/TSV tables.

    Example:
        >>> converter = CSVConverter(store)
        >>> result = converter.import_to_workspace("shapeID,propertyID\\nPerson,foaf:name", "People")
        >>> result.shapes_created, result.rows_imported
        (1, 1)
    """

    def __init__(self, store: WorkspaceStore, cache: Optional[ExportCache] = None):
        """
        Initialize the converter.

        Args:
            store: Workspace store to read from and write to.
            cache: Optional export cache consulted by export_workspace.
        """
        self.store = store
        self.cache = cache
        self._parser = CSVParser()

    def parse(self, content: str) -> CSVParseResult:
        return self._parser.parse(content)

    # ========================================================================
    # Import
    # ========================================================================

    def import_to_workspace(self, content: str, workspace_name: str) -> CSVImportResult:
        """
        Import CSV/TSV text into a newly created workspace.

        Importing the same content twice creates two independent workspaces.

        Args:
            content: Full file content.
            workspace_name: Name of the workspace to create.

        Returns:
            CSVImportResult. When parsing fails ``success`` is False and no
            workspace is created.
        """
        parsed = self._parser.parse(content)
        if not parsed.success:
            logger.warning(f"CSV import rejected: {'; '.join(e.message for e in parsed.errors)}")
            return CSVImportResult(success=False, errors=parsed.errors, warnings=parsed.warnings)

        groups: Dict[str, _ShapeGroup] = {}
        for parsed_row in parsed.rows:
            shape_id = parsed_row.shape_id or ShapeConventions.DEFAULT_SHAPE_ID
            group = groups.get(shape_id)
            if group is None:
                group = groups[shape_id] = _ShapeGroup(parsed_row.shape_label, parsed_row.resource_uri)
            if parsed_row.shape_label and not group.label:
                group.label = parsed_row.shape_label
            if parsed_row.resource_uri and not group.resource_uri:
                group.resource_uri = parsed_row.resource_uri
            group.rows.append(parsed_row.row)

        workspace = self.store.workspaces.create(workspace_name)
        known_prefixes = {ns.prefix for ns in self.store.namespaces.list(workspace.id)}

        result = CSVImportResult(success=True, workspace_id=workspace.id, warnings=list(parsed.warnings))

        for shape_id, group in tqdm(
            groups.items(),
            desc="Importing shapes",
            unit="shape",
            total=len(groups),
            disable=len(groups) < ProgressConfig.MIN_ITEMS_FOR_PROGRESS,
        ):
            self.store.shapes.create(workspace.id, shape_id, label=group.label, resource_uri=group.resource_uri)
            result.shapes_created += 1

            # Lines that only name a shape establish it without adding a row.
            data_rows = [row for row in group.rows if row.has_data()]
            for i, row in enumerate(data_rows):
                prefix = prefix_of(row.property_id)
                if prefix in DCTapVocabulary.FULL_URI_PREFIXES:
                    result.warnings.append(ValidationIssue(
                        f'Shape "{shape_id}", row {i + 1}: Property ID "{row.property_id}" appears to be a full URI. '
                        f'Consider using a prefixed form.',
                        Severity.WARNING,
                    ))
                elif prefix and prefix not in known_prefixes and prefix not in result.unknown_namespaces:
                    result.unknown_namespaces.append(prefix)

                self.store.rows.create(workspace.id, shape_id, row.copy(id=None, row_order=i))
                result.rows_imported += 1
            logger.debug(f"Imported shape '{shape_id}' with {len(data_rows)} rows")

        for prefix in result.unknown_namespaces:
            self.store.namespaces.create(workspace.id, prefix, placeholder_uri(prefix))
            result.warnings.append(ValidationIssue(
                f'Unknown namespace prefix "{prefix}" - placeholder URI created. '
                f'You may want to update this in the Namespaces panel.',
                Severity.WARNING,
            ))
            logger.warning(f"Created placeholder namespace for unknown prefix '{prefix}'")

        logger.info(
            f"Imported {result.shapes_created} shapes and {result.rows_imported} rows "
            f"into workspace '{workspace_name}' ({workspace.id})"
        )
        return result

    def import_file(self, file_path: Union[str, Path], workspace_name: Optional[str] = None) -> CSVImportResult:
        """
        Import a CSV/TSV file; the workspace name defaults to the file stem.

        Raises:
            FileNotFoundError: If the file does not exist.
            InputFormatError: If the file is not valid UTF-8 text.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            content = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise InputFormatError("File is not valid UTF-8 text", file_path=str(path), details=str(e)) from e
        return self.import_to_workspace(content, workspace_name or path.stem)

    # ========================================================================
    # Export
    # ========================================================================

    def export_workspace(self, workspace_id: str, fmt: str = "csv") -> str:
        """
        Export every shape of a workspace as CSV or TSV text.

        Args:
            workspace_id: Workspace to export.
            fmt: ``"csv"`` or ``"tsv"``.

        Returns:
            The table as text, lines joined with ``\\n``.

        Raises:
            ValueError: If ``fmt`` is not csv or tsv.
            WorkspaceNotFoundError: If the workspace does not exist.
        """
        if fmt not in TabularFormat.DELIMITERS:
            raise ValueError(f"Unsupported export format: {fmt}. Use 'csv' or 'tsv'.")
        kind = CacheKind.TSV if fmt == "tsv" else CacheKind.CSV
        if self.cache is not None:
            cached = self.cache.get(kind, workspace_id)
            if cached is not MISSING:
                logger.debug(f"Serving cached {fmt} export for workspace {workspace_id}")
                return cached

        if self.store.workspaces.get(workspace_id) is None:
            raise WorkspaceNotFoundError(workspace_id)

        delimiter = TabularFormat.DELIMITERS[fmt]
        lines = [delimiter.join(TabularFormat.EXPORT_HEADERS)]
        shapes = self.store.shapes.list(workspace_id)
        row_count = 0

        for shape in shapes:
            identity = [
                escape_value(shape.shape_id, delimiter),
                escape_value(shape.label, delimiter),
                escape_value(shape.resource_uri, delimiter),
            ]
            rows = self.store.rows.list(workspace_id, shape.shape_id)
            if not rows:
                lines.append(delimiter.join(identity + [""] * len(ROW_DATA_FIELDS)))
                continue
            for i, row in enumerate(rows):
                cells = identity if i == 0 else ["", "", ""]
                cells = cells + [
                    escape_value(getattr(row, name), delimiter, name in _PIPED_FIELDS)
                    for name in ROW_DATA_FIELDS
                ]
                lines.append(delimiter.join(cells))
            row_count += len(rows)

        text = "\n".join(lines)
        logger.info(f"Exported {len(shapes)} shapes and {row_count} rows as {fmt.upper()}")
        if self.cache is not None:
            self.cache.set(kind, workspace_id, text)
        return text

    def export_to_file(self, workspace_id: str, output_path: Union[str, Path], fmt: str = "csv") -> Path:
        """Export a workspace and write it to ``output_path``."""
        path = Path(output_path)
        text = self.export_workspace(workspace_id, fmt)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {fmt.upper()} export to {path}")
        return path
