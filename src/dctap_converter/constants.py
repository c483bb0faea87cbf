"""
Centralized configuration constants for the DCTap Profile Converter.

This module provides a single source of truth for vocabularies, reserved
identifiers, default values and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 4
    FILE_NOT_FOUND = 5
    LOCKED = 6
    CANCELLED = 7


# ============================================================================
# DCTap Vocabulary
# ============================================================================

class DCTapVocabulary:
    """Allowed values for the enumerated DCTap columns."""

    VALUE_NODE_TYPES: Final[tuple[str, ...]] = ("IRI", "literal", "bnode")
    """Valid valueNodeType values (compared case-insensitively)."""

    VALUE_CONSTRAINT_TYPES: Final[tuple[str, ...]] = (
        "picklist",
        "IRIstem",
        "pattern",
        "languageTag",
        "minLength",
        "maxLength",
        "minInclusive",
        "maxInclusive",
    )
    """Valid valueConstraintType values."""

    DATATYPES: Final[tuple[str, ...]] = (
        "xsd:string",
        "xsd:boolean",
        "xsd:decimal",
        "xsd:integer",
        "xsd:float",
        "xsd:double",
        "xsd:date",
        "xsd:dateTime",
        "xsd:time",
        "xsd:duration",
        "xsd:gYear",
        "xsd:gYearMonth",
        "xsd:anyURI",
        "rdf:langString",
    )
    """Datatypes recognised without a warning."""

    LITERAL: Final[str] = "literal"
    BNODE: Final[str] = "bnode"
    IRI: Final[str] = "IRI"
    IRI_STEM: Final[str] = "IRIstem"
    PICKLIST: Final[str] = "picklist"

    FULL_URI_PREFIXES: Final[tuple[str, ...]] = ("http", "https")
    """Prefixes that indicate a full URI was written where a CURIE was expected."""


# ============================================================================
# Structural Conventions
# ============================================================================

class ShapeConventions:
    """Row and id conventions that encode structure inside plain shapes."""

    HAS_PART_PROPERTY: Final[str] = "dcterms:hasPart"
    """Property used for profile links and starting-point menu items."""

    HAS_SHAPE_LABEL: Final[str] = "Has Shape"
    """Label that marks a hasPart row as a profile-to-template link."""

    STARTING_POINT_FOLDER_NAME: Final[str] = "Starting Points"
    """Reserved folder holding starting-point group shapes."""

    STARTING_POINT_PREFIX: Final[str] = "startingpoint:"
    """Reserved shapeId prefix for starting-point group shapes."""

    STARTING_POINT_MARKER: Final[str] = "startingpoint"
    """Case-insensitive substring that also marks a starting-point shape."""

    STARTING_POINT_INDEX_ID: Final[str] = "startingpoint:index"
    """Fixed id of the synthetic index shape."""

    STARTING_POINT_INDEX_LABEL: Final[str] = "Starting Point Index"
    """Label given to the index shape on import."""

    STARTING_POINT_CONFIG_TYPE: Final[str] = "startingPoints"
    """configType marker of a starting-points document."""

    PROFILE_CONFIG_TYPE: Final[str] = "profile"
    """configType marker of a Marva profile document."""

    DEFAULT_SHAPE_ID: Final[str] = "default"
    """Shape assigned to CSV rows that precede any shapeID value."""

    PLACEHOLDER_NAMESPACE_TEMPLATE: Final[str] = "http://example.org/{prefix}/"
    """URI synthesised for namespace prefixes unknown at import time."""


class FolderClassifierLimits:
    """Constraints on id segments used for folder inference."""

    ROOT_TOKEN: Final[str] = "lc"
    """Required first segment of classifiable shape ids."""

    RESOURCE_TEMPLATE_TAG: Final[str] = "RT"
    """Type tag whose folders narrow on the fourth segment."""

    MAX_GROUP_LENGTH: Final[int] = 20
    """Maximum length of the group (third) segment."""

    MAX_SUBGROUP_LENGTH: Final[int] = 30
    """Maximum length of the resource-template subgroup (fourth) segment."""


# ============================================================================
# Tabular Format
# ============================================================================

class TabularFormat:
    """CSV/TSV export settings."""

    EXPORT_HEADERS: Final[tuple[str, ...]] = (
        "shapeID",
        "shapeLabel",
        "resourceURI",
        "propertyID",
        "propertyLabel",
        "mandatory",
        "repeatable",
        "valueNodeType",
        "valueDataType",
        "valueShape",
        "valueConstraint",
        "valueConstraintType",
        "note",
        "lcDefaultLiteral",
        "lcDefaultURI",
        "lcDataTypeURI",
        "lcRemark",
    )
    """Column order of exported files."""

    PIPE_SEPARATOR: Final[str] = " | "
    """Replacement for embedded newlines in valueShape and valueConstraint."""

    DELIMITERS: Final[dict[str, str]] = {"csv": ",", "tsv": "\t"}
    """Delimiter per export format."""


# ============================================================================
# Storage
# ============================================================================

class StorageDefaults:
    """Default storage locations and retry behavior."""

    DATABASE_PATH: Final[str] = "data/dctap.db"
    """SQLite database file, relative to the working directory."""

    LOCKED_WORKSPACES_FILE: Final[str] = "locked-workspaces.json"
    """Locked workspace policy file."""

    BUSY_TIMEOUT_SECONDS: Final[float] = 30.0
    """SQLite busy timeout."""

    MAX_RETRY_ATTEMPTS: Final[int] = 5
    """Attempts for an operation failing with 'database is locked'."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""


class ProgressConfig:
    """Progress bar behavior."""

    MIN_ITEMS_FOR_PROGRESS: Final[int] = 10
    """Progress bars are hidden for smaller batches."""
