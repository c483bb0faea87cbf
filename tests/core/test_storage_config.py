"""Tests for StorageConfig loading."""

import json

import pytest

from dctap_converter.constants import StorageDefaults
from dctap_converter.core.config import StorageConfig
from fixtures import SAMPLE_CONFIG


@pytest.mark.unit
class TestStorageConfig:
    """Configuration parsing."""

    def test_defaults(self):
        """An empty config uses the built-in defaults."""
        config = StorageConfig.from_dict({})
        assert config.database_path == StorageDefaults.DATABASE_PATH
        assert config.locked_workspaces_file == StorageDefaults.LOCKED_WORKSPACES_FILE
        assert config.logging == {}

    def test_from_dict(self):
        config = StorageConfig.from_dict(SAMPLE_CONFIG)
        assert config.database_path == SAMPLE_CONFIG["storage"]["database"]
        assert config.locked_workspaces_file == SAMPLE_CONFIG["locked_workspaces_file"]
        assert config.logging["level"] == "INFO"

    def test_storage_must_be_object(self):
        with pytest.raises(ValueError, match="storage"):
            StorageConfig.from_dict({"storage": "data.db"})

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(SAMPLE_CONFIG), encoding="utf-8")
        assert StorageConfig.from_file(str(path)).database_path == SAMPLE_CONFIG["storage"]["database"]

    def test_missing_file(self, tmp_path):
        """The error points at config.sample.json."""
        with pytest.raises(FileNotFoundError, match="config.sample.json"):
            StorageConfig.from_file(str(tmp_path / "absent.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            StorageConfig.from_file(str(path))

    def test_non_object_root(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            StorageConfig.from_file(str(path))

    def test_empty_path(self):
        with pytest.raises(ValueError):
            StorageConfig.from_file("")
