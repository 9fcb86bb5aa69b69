"""Unit tests for configuration and constants."""

from __future__ import annotations

from pathlib import Path

import pytest

from ead_exporter.config import ConfigLoader, ExporterConfig
from ead_exporter.constants import ConfigFiles, Defaults


class TestExporterConfig:
    """Test suite for ExporterConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = ExporterConfig()

        assert config.include_unpublished is False
        assert config.include_daos is False
        assert config.use_numbered_c_tags is False
        assert config.sort_controlaccess is True
        assert config.emit_component_ids is False
        assert config.generate_container_ids is True
        assert config.id_prefix == "aspace_"
        assert config.chunk_size == Defaults.CHUNK_SIZE
        assert config.creation_application == "ArchivesSpace"
        assert config.labels_file is None

    def test_config_is_immutable(self):
        """Test that config is frozen and cannot be modified."""
        config = ExporterConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.include_daos = True

    def test_config_validation_chunk_size(self):
        ExporterConfig(chunk_size=1)

        with pytest.raises(ValueError, match="chunk_size must be positive"):
            ExporterConfig(chunk_size=0)

    def test_config_validation_id_prefix(self):
        with pytest.raises(ValueError, match="id_prefix must not be blank"):
            ExporterConfig(id_prefix="  ")

    def test_with_overrides_skips_none(self):
        config = ExporterConfig().with_overrides(
            include_daos=True, include_unpublished=None, chunk_size=64
        )

        assert config.include_daos is True
        assert config.include_unpublished is False
        assert config.chunk_size == 64

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            ExporterConfig().with_overrides(chunk_size=-1)


class TestEnvironment:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EAD_INCLUDE_UNPUBLISHED", "yes")
        monkeypatch.setenv("EAD_USE_NUMBERED_C_TAGS", "1")
        monkeypatch.setenv("EAD_ID_PREFIX", "ms_")
        monkeypatch.setenv("EAD_CHUNK_SIZE", "512")
        monkeypatch.setenv("EAD_LABELS_FILE", "labels.toml")

        config = ExporterConfig.from_env()

        assert config.include_unpublished is True
        assert config.use_numbered_c_tags is True
        assert config.id_prefix == "ms_"
        assert config.chunk_size == 512
        assert config.labels_file == Path("labels.toml")

    def test_blank_flag_uses_default(self, monkeypatch):
        monkeypatch.setenv("EAD_SORT_CONTROLACCESS", "  ")
        assert ExporterConfig.from_env().sort_controlaccess is True

    def test_invalid_flag_raises(self, monkeypatch):
        monkeypatch.setenv("EAD_INCLUDE_DAOS", "maybe")
        with pytest.raises(ValueError, match="EAD_INCLUDE_DAOS must be a boolean"):
            ExporterConfig.from_env()


class TestConfigLoader:
    """Test suite for ConfigLoader class."""

    def test_load_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader.load() == ExporterConfig()

    def test_load_from_toml(self, tmp_path):
        config_file = tmp_path / ConfigFiles.DEFAULT_NAME
        config_file.write_text(
            "\n".join(
                [
                    "[export]",
                    "include_daos = true",
                    'sort_controlaccess = "off"',
                    "chunk_size = 1024",
                    'creation_application = "Harbour Tools"',
                    "",
                    "[identifiers]",
                    "emit_component_ids = true",
                    'id_prefix = "cta_"',
                    "",
                    "[paths]",
                    'labels_file = "labels/en.toml"',
                ]
            ),
            encoding="utf-8",
        )

        config = ConfigLoader.load(config_file)

        assert config.include_daos is True
        assert config.sort_controlaccess is False
        assert config.chunk_size == 1024
        assert config.creation_application == "Harbour Tools"
        assert config.emit_component_ids is True
        assert config.id_prefix == "cta_"
        assert config.labels_file == tmp_path / "labels" / "en.toml"

    def test_toml_overrides_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EAD_INCLUDE_DAOS", "true")
        monkeypatch.setenv("EAD_ID_PREFIX", "env_")
        config_file = tmp_path / "export.toml"
        config_file.write_text("[export]\ninclude_daos = false\n", encoding="utf-8")

        config = ConfigLoader.load(config_file)

        assert config.include_daos is False
        assert config.id_prefix == "env_"

    def test_invalid_toml_warns_and_keeps_defaults(self, tmp_path):
        config_file = tmp_path / "broken.toml"
        config_file.write_text("[export\n", encoding="utf-8")

        with pytest.warns(UserWarning, match="Failed to load config"):
            config = ConfigLoader.load(config_file)

        assert config == ExporterConfig()

    def test_invalid_value_warns(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[export]\nchunk_size = 0\n", encoding="utf-8")

        with pytest.warns(UserWarning):
            config = ConfigLoader.load(config_file)

        assert config.chunk_size == Defaults.CHUNK_SIZE
