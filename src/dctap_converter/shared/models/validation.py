"""
Validation result models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(Enum):
    """Issue severity levels."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """
    A single row/column-scoped validation finding.

    Attributes:
        message: Human-readable description.
        severity: ERROR or WARNING.
        row: 0-based row position within the shape, if known.
        column: DCTap column name the issue applies to.
    """
    message: str
    severity: Severity = Severity.ERROR
    row: Optional[int] = None
    column: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"message": self.message, "severity": self.severity.value}
        if self.row is not None:
            result["row"] = self.row
        if self.column:
            result["column"] = self.column
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationIssue":
        """Create an issue from its dictionary form."""
        return cls(
            message=data.get("message", ""),
            severity=Severity(data.get("severity", Severity.ERROR.value)),
            row=data.get("row"),
            column=data.get("column"),
        )


@dataclass
class ValidationResult:
    """Outcome of validating a row or a shape."""
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when there are no errors; warnings do not invalidate."""
        return not self.errors

    def add_error(self, message: str, column: Optional[str] = None, row: Optional[int] = None) -> None:
        self.errors.append(ValidationIssue(message, Severity.ERROR, row, column))

    def add_warning(self, message: str, column: Optional[str] = None, row: Optional[int] = None) -> None:
        self.warnings.append(ValidationIssue(message, Severity.WARNING, row, column))

    def merge(self, other: "ValidationResult", row: Optional[int] = None) -> None:
        """Append another result's issues, stamping them with a row number."""
        for issue in other.errors:
            self.errors.append(ValidationIssue(issue.message, issue.severity, row, issue.column))
        for issue in other.warnings:
            self.warnings.append(ValidationIssue(issue.message, issue.severity, row, issue.column))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }
