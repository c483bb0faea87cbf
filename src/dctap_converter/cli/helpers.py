"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Logging setup
- Console output formatting
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any, List

from ..constants import LoggingConfig


# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render records as one JSON object per line, keeping ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).strftime(
                LoggingConfig.JSON_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _STANDARD_RECORD_FIELDS or key in payload or key.startswith("_"):
                continue
            payload[key] = value if isinstance(value, (str, int, float, bool, type(None))) else str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def get_default_config_path() -> str:
    """Get the default configuration file path.

    Returns:
        Path to config.json in the project root directory.
    """
    # src/dctap_converter/cli/helpers.py -> cli -> dctap_converter -> src -> project root
    return str(Path(__file__).resolve().parents[3] / "config.json")


def _coerce_positive_int(value: Any, default: int) -> int:
    """Convert config-provided values to positive integers."""
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _open_log_file(path: str, rotation: Dict[str, Any]) -> Handler:
    """Open a (rotating) file handler, creating the parent directory."""
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    if not rotation.get("enabled", LoggingConfig.ROTATION_ENABLED):
        return logging.FileHandler(path, encoding="utf-8")
    max_mb = _coerce_positive_int(rotation.get("max_mb"), LoggingConfig.MAX_LOG_FILE_MB)
    return RotatingFileHandler(
        path,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=_coerce_positive_int(rotation.get("backup_count"), LoggingConfig.LOG_BACKUP_COUNT),
        encoding="utf-8",
    )


def setup_logging(
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Configure the root logger from the ``logging`` config section.

    Console output goes to stderr so exports written to stdout stay clean.
    If the configured log file cannot be opened, a file of the same name in
    the system temp directory is used instead; if that fails too, logging
    stays console-only.

    Args:
        config: Logging section (level, file, format, rotation).
        include_console: If False, skip the console handler.

    Returns:
        The log file path in use, or None if logging to console only.
    """
    config = config or {}
    log_level = getattr(logging, str(config.get("level", LoggingConfig.DEFAULT_LOG_LEVEL)).upper(), logging.INFO)

    if str(config.get("format", LoggingConfig.DEFAULT_FORMAT_STYLE)).lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    handlers: List[Handler] = []
    actual_log_file: Optional[str] = None

    requested = config.get("file")
    if requested:
        rotation = config.get("rotation") if isinstance(config.get("rotation"), dict) else {}
        candidates = [requested, os.path.join(tempfile.gettempdir(), os.path.basename(requested) or "dctap.log")]
        for path in candidates:
            try:
                handlers.append(_open_log_file(path, rotation))
            except OSError as exc:
                print(f"Warning: Could not open log file {path}: {exc}", file=sys.stderr)
                continue
            actual_log_file = path
            if path != requested:
                print(f"Note: Using fallback log file: {path}", file=sys.stderr)
            break

    if include_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS.clear()

    root_logger.setLevel(log_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")
    return actual_log_file


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty or file contains invalid JSON.
        FileNotFoundError: If the configuration file doesn't exist.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a config.json file or specify one with --config"
        )
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {config_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {config_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

    return config


_RULE = "=" * 60


def print_header(title: str) -> None:
    """Print a section title between two rules."""
    print(f"\n{_RULE}\n{title}\n{_RULE}")


def print_footer() -> None:
    print(f"{_RULE}\n")


def format_count_summary(items: Dict[str, int], prefix: str = "  ") -> str:
    """One ``name: count`` line per item, largest count first."""
    ordered = sorted(items.items(), key=lambda item: -item[1])
    return "\n".join(f"{prefix}{name}: {count}" for name, count in ordered)


def confirm_action(prompt: str) -> bool:
    """Ask a yes/no question on stdin; anything but y/yes means no."""
    return input(f"{prompt} [y/N]: ").strip().lower() in ("y", "yes")
