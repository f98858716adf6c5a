"""
Tests for configuration loader.

This module tests the ConfigLoader class including file loading,
environment variable overrides, and validation of malformed files.
"""

import pytest
import json
import os
from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

import yaml

from bootcast.infrastructure.config.loader import ConfigLoader
from bootcast.infrastructure.config.models import ApplicationConfig, ListenerConfig


class TestConfigLoader:
    """Test cases for ConfigLoader class."""

    @pytest.fixture
    def config_loader(self) -> ConfigLoader:
        """Create a ConfigLoader instance."""
        return ConfigLoader()

    @pytest.fixture
    def sample_config_dict(self) -> Dict[str, Any]:
        """Sample configuration dictionary."""
        return {
            "name": "Test Application",
            "version": "1.0.0",
            "debug": True,
            "environment": "testing",
            "profiles": ["dev"],
            "properties": {"server.port": 8080},
            "listeners": [
                "bootcast.listeners.builtin:StartupTimingListener",
                {"path": "bootcast.listeners.builtin:FailureReportingListener", "priority": 1},
            ],
            "logging": {
                "level": "DEBUG",
                "console_enabled": True,
                "file_enabled": False
            }
        }

    @pytest.fixture
    def clean_env(self) -> Any:
        """Remove BOOTCAST_ variables for the duration of a test."""
        env = {k: v for k, v in os.environ.items() if not k.startswith("BOOTCAST_")}
        with patch.dict(os.environ, env, clear=True):
            yield

    def test_load_default_config(self, config_loader: ConfigLoader, clean_env: Any) -> None:
        """Without a file the defaults are used."""
        config = config_loader.load_config()

        assert config == ApplicationConfig()
        assert config.config_file_path is None

    def test_load_yaml_file(self, config_loader: ConfigLoader, clean_env: Any,
                            sample_config_dict: Dict[str, Any], tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")

        config = config_loader.load_config(str(path))

        assert config.name == "Test Application"
        assert config.profiles == ["dev"]
        assert config.properties == {"server.port": 8080}
        assert config.listeners[1].priority == 1
        assert config.logging.level == "DEBUG"
        assert config.config_file_path == str(path)

    def test_load_json_file(self, config_loader: ConfigLoader, clean_env: Any,
                            sample_config_dict: Dict[str, Any], tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(sample_config_dict), encoding="utf-8")

        config = config_loader.load_config(str(path))

        assert config.version == "1.0.0"
        assert config.debug is True
        assert len(config.listeners) == 2

    def test_empty_yaml_file_gives_defaults(self, config_loader: ConfigLoader, clean_env: Any,
                                            tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")

        config = config_loader.load_config(str(path))

        assert config.name == "bootcast"

    def test_missing_file(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            config_loader.load_config(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("name = 'x'", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported configuration file format"):
            config_loader.load_config(str(path))

    def test_invalid_yaml(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("name: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            config_loader.load_config(str(path))

    def test_invalid_json(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            config_loader.load_config(str(path))

    def test_top_level_must_be_mapping(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            config_loader.load_config(str(path))

    def test_environment_overrides(self, config_loader: ConfigLoader, clean_env: Any,
                                   sample_config_dict: Dict[str, Any], tmp_path: Path) -> None:
        """Environment variables take precedence over file values."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")
        overrides = {
            "BOOTCAST_NAME": "From Env",
            "BOOTCAST_DEBUG": "false",
            "BOOTCAST_PROFILES": "blue, green",
            "BOOTCAST_LOG_LEVEL": "WARNING",
            "BOOTCAST_LOG_FILE_ENABLED": "yes",
        }

        with patch.dict(os.environ, overrides):
            config = config_loader.load_config(str(path))

        assert config.name == "From Env"
        assert config.debug is False
        assert config.profiles == ["blue", "green"]
        assert config.logging.level == "WARNING"
        assert config.logging.file_enabled is True
        # Values not overridden come from the file
        assert config.logging.console_enabled is True
        assert config.environment == "testing"

    def test_custom_env_prefix(self, clean_env: Any) -> None:
        with patch.dict(os.environ, {"MYAPP_NAME": "custom"}):
            config = ConfigLoader(env_prefix="MYAPP_").load_config()

        assert config.name == "custom"

    def test_save_and_reload_yaml(self, config_loader: ConfigLoader, clean_env: Any,
                                  tmp_path: Path) -> None:
        path = tmp_path / "saved.yaml"
        config = ApplicationConfig(name="saved", listeners=[ListenerConfig(path="a.b:C")])
        config.config_file_path = "ignored.yaml"

        config_loader.save_config(config, str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8"))

        assert 'config_file_path' not in data
        assert list(data)[0] == "name"
        assert config_loader.load_config(str(path)).listeners == config.listeners

    def test_save_json(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "saved.json"

        config_loader.save_config(ApplicationConfig(name="saved"), str(path), format="json")

        assert json.loads(path.read_text(encoding="utf-8"))['name'] == "saved"

    def test_save_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            config_loader.save_config(ApplicationConfig(), str(tmp_path / "x.ini"), format="ini")

    def test_unknown_logging_key_names_the_key(self, config_loader: ConfigLoader, clean_env: Any,
                                               tmp_path: Path) -> None:
        path = tmp_path / "typo.yaml"
        path.write_text("logging:\n  lvl: DEBUG\n", encoding="utf-8")

        with pytest.raises(ValueError, match="lvl"):
            config_loader.load_config(str(path))

    def test_null_logging_section(self, config_loader: ConfigLoader, clean_env: Any,
                                  tmp_path: Path) -> None:
        path = tmp_path / "null.yaml"
        path.write_text("logging:\n", encoding="utf-8")

        with pytest.raises(ValueError, match="'logging' must be a mapping"):
            config_loader.load_config(str(path))

    def test_null_logging_section_with_environment_override(self, tmp_path: Path) -> None:
        """An override does not hide a malformed section."""
        path = tmp_path / "null.yaml"
        path.write_text("logging:\n", encoding="utf-8")
        loader = ConfigLoader(environ={"BOOTCAST_LOG_LEVEL": "DEBUG"})

        with pytest.raises(ValueError, match="'logging' must be a mapping"):
            loader.load_config(str(path))

    def test_wrongly_typed_value(self, config_loader: ConfigLoader, clean_env: Any,
                                 tmp_path: Path) -> None:
        path = tmp_path / "types.yaml"
        path.write_text("logging:\n  backup_count: five\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            config_loader.load_config(str(path))

    def test_injected_environ(self) -> None:
        loader = ConfigLoader(environ={
            "BOOTCAST_ENVIRONMENT": "staging",
            "BOOTCAST_LOG_CONSOLE_ENABLED": "off",
        })

        config = loader.load_config()

        assert config.environment == "staging"
        assert config.logging.console_enabled is False
