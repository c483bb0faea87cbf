"""
Typed storage settings read from the JSON configuration file.

    {
      "storage": {"database": "data/dctap.db"},
      "locked_workspaces_file": "locked-workspaces.json",
      "logging": {"level": "INFO", "file": "logs/dctap.log"}
    }
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from ..constants import StorageDefaults


@dataclass
class StorageConfig:
    """Configuration for the workspace store and lock policy."""
    database_path: str = StorageDefaults.DATABASE_PATH
    locked_workspaces_file: str = StorageDefaults.LOCKED_WORKSPACES_FILE
    logging: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StorageConfig':
        """Create StorageConfig from a dictionary; missing keys use the defaults."""
        storage = config_dict.get('storage') or {}
        if not isinstance(storage, dict):
            raise ValueError(f"'storage' must be a JSON object, got {type(storage).__name__}")
        logging_config = config_dict.get('logging') or {}
        return cls(
            database_path=storage.get('database', StorageDefaults.DATABASE_PATH),
            locked_workspaces_file=config_dict.get(
                'locked_workspaces_file', StorageDefaults.LOCKED_WORKSPACES_FILE
            ),
            logging=logging_config if isinstance(logging_config, dict) else {},
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'StorageConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ValueError("config_path cannot be empty")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}. "
                f"Copy config.sample.json to config.json or pass --config."
            )
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except UnicodeDecodeError as e:
            raise ValueError(f"Encoding error reading {config_path}: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file must contain a JSON object, got {type(config_dict).__name__}")

        return cls.from_dict(config_dict)
