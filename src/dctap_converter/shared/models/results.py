"""
Result models returned by the format converters.

Import results carry counts plus any warnings even on success; callers
are expected to surface warnings alongside the counts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .dctap import StatementRow
from .validation import ValidationIssue


@dataclass
class ParsedRow:
    """A CSV data row resolved to its owning shape."""
    shape_id: str
    shape_label: Optional[str]
    resource_uri: Optional[str]
    row: StatementRow


@dataclass
class CSVParseResult:
    """Outcome of parsing CSV/TSV text."""
    success: bool
    rows: List[ParsedRow] = field(default_factory=list)
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    detected_format: str = "csv"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "success": self.success,
            "rowCount": len(self.rows),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "detectedFormat": self.detected_format,
        }


@dataclass
class CSVImportResult:
    """Outcome of importing CSV/TSV text into a new workspace."""
    success: bool
    workspace_id: Optional[str] = None
    shapes_created: int = 0
    rows_imported: int = 0
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    unknown_namespaces: List[str] = field(default_factory=list)

    def get_summary(self) -> str:
        """Get a human-readable summary."""
        if not self.success:
            lines = ["Import failed:"]
            lines.extend(f"  - {e.message}" for e in self.errors)
            return "\n".join(lines)
        lines = [
            f"Workspace: {self.workspace_id}",
            f"Shapes created: {self.shapes_created}",
            f"Rows imported: {self.rows_imported}",
        ]
        if self.unknown_namespaces:
            lines.append(f"Placeholder namespaces: {', '.join(self.unknown_namespaces)}")
        if self.warnings:
            lines.append(f"Warnings ({len(self.warnings)}):")
            lines.extend(f"  - {w.message}" for w in self.warnings)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "success": self.success,
            "workspaceId": self.workspace_id,
            "shapesCreated": self.shapes_created,
            "rowsImported": self.rows_imported,
        }
        if self.errors:
            result["errors"] = [e.to_dict() for e in self.errors]
        if self.warnings:
            result["warnings"] = [w.to_dict() for w in self.warnings]
        if self.unknown_namespaces:
            result["unknownNamespaces"] = list(self.unknown_namespaces)
        return result


@dataclass
class MarvaImportResult:
    """Outcome of importing Marva profile documents."""
    workspace_id: str
    workspace_name: str
    shapes_created: int = 0
    rows_created: int = 0
    skipped_documents: List[str] = field(default_factory=list)

    def get_summary(self) -> str:
        """Get a human-readable summary."""
        lines = [
            f"Workspace: {self.workspace_name} ({self.workspace_id})",
            f"Shapes created: {self.shapes_created}",
            f"Rows created: {self.rows_created}",
        ]
        if self.skipped_documents:
            lines.append(f"Skipped documents without a Profile: {', '.join(self.skipped_documents)}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "workspaceId": self.workspace_id,
            "workspaceName": self.workspace_name,
            "shapesCreated": self.shapes_created,
            "rowsCreated": self.rows_created,
        }


@dataclass
class StartingPointImportResult:
    """Outcome of importing a starting-points document."""
    shapes_created: int = 0
    rows_created: int = 0
    folder_id: Optional[str] = None

    def get_summary(self) -> str:
        """Get a human-readable summary."""
        return "\n".join([
            f"Shapes created: {self.shapes_created}",
            f"Rows created: {self.rows_created}",
            f"Folder: {self.folder_id}",
        ])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "shapesCreated": self.shapes_created,
            "rowsCreated": self.rows_created,
            "folderId": self.folder_id,
        }
