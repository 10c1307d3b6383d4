"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from vinyl_catalog.exceptions import ConfigurationError
from vinyl_catalog.models.config import (
    Config,
    create_default_config,
    load_config,
    save_config,
)


class TestConfigFromEnv:
    """Tests for Config.from_env."""

    def test_defaults(self):
        config = Config.from_env({})

        assert config.discogs.token is None
        assert config.discogs.base_url == "https://api.discogs.com"
        assert config.discogs.user_agent == "VinylCollectionApp/1.0"
        assert config.storage.storage_key == "vinyl_records"

    def test_values_from_environment(self, tmp_path):
        config = Config.from_env({
            "DISCOGS_TOKEN": "abc",
            "DISCOGS_BASE_URL": "https://discogs.test",
            "VINYL_CATALOG_DATA_DIR": str(tmp_path),
        })

        assert config.discogs.token == "abc"
        assert config.discogs.base_url == "https://discogs.test"
        assert config.storage.data_dir == tmp_path

    def test_empty_token_is_not_configured(self):
        assert Config.from_env({"DISCOGS_TOKEN": ""}).discogs.token is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DISCOGS_TOKEN", "from-env")
        assert Config.from_env().discogs.token == "from-env"


class TestConfigFiles:
    """Tests for JSON configuration files."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        config = Config.default()
        config.discogs.token = "abc"
        config.storage.data_dir = Path("/srv/vinyl")

        save_config(config, path)
        loaded = load_config(path)

        assert loaded == config
        assert json.loads(path.read_text())["storage"]["data_dir"] == "/srv/vinyl"

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"discogs": {"token": "abc"}}))

        loaded = load_config(path)

        assert loaded.discogs.token == "abc"
        assert loaded.discogs.base_url == "https://api.discogs.com"
        assert loaded.storage.storage_key == "vinyl_records"

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "config.json"
        create_default_config(path)
        assert load_config(path) == Config.default()

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"discogs": "abc"}'])
    def test_invalid_files(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)

        with pytest.raises(ConfigurationError):
            load_config(path)
