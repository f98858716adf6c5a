"""
Configuration loading and saving utilities.

A configuration is read from at most one YAML or JSON file. Single values
are then replaced from ``BOOTCAST_*`` environment variables, and the result
is validated as an ApplicationConfig. Every problem with the input is
reported as a ValueError naming the offending file or key.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import yaml

from .models import ApplicationConfig

ENV_PREFIX = "BOOTCAST_"

FILE_FORMATS = {'.yaml': "yaml", '.yml': "yaml", '.json': "json"}

TRUE_VALUES = ('true', '1', 'yes', 'on', 'enabled')


def parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def parse_list(value: str) -> List[str]:
    """Split a comma separated value, dropping empty items."""
    return [item.strip() for item in value.split(',') if item.strip()]


# Variable suffix -> (section, key, converter); a None section is the top level
ENV_OVERRIDES: Dict[str, Tuple[Optional[str], str, Callable[[str], Any]]] = {
    "NAME": (None, "name", str),
    "DEBUG": (None, "debug", parse_bool),
    "ENVIRONMENT": (None, "environment", str),
    "PROFILES": (None, "profiles", parse_list),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_DIR": ("logging", "log_directory", str),
    "LOG_FILE_ENABLED": ("logging", "file_enabled", parse_bool),
    "LOG_CONSOLE_ENABLED": ("logging", "console_enabled", parse_bool),
}


class ConfigLoader:
    """Builds validated configurations from files and the process environment."""

    def __init__(self, env_prefix: str = ENV_PREFIX,
                 environ: Optional[Mapping[str, str]] = None) -> None:
        self._env_prefix = env_prefix
        self._environ = environ

    def load_config(self, config_file: Optional[str] = None) -> ApplicationConfig:
        """
        Load configuration from file and environment variables.

        Args:
            config_file: Path to configuration file (optional)

        Returns:
            Loaded and validated configuration

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file or an override is not a valid configuration
        """
        data = self.read_file(config_file) if config_file else {}
        self._apply_environment(data)

        try:
            config = ApplicationConfig.from_dict(data)
        except TypeError as e:
            # Values of the wrong type, e.g. a string where a number belongs
            source = config_file or "environment"
            raise ValueError(f"Invalid configuration in {source}: {e}") from e

        config.config_file_path = config_file
        return config

    def read_file(self, file_path: str) -> Dict[str, Any]:
        """Parse a configuration file into a mapping. An empty file is an empty mapping."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        file_format = FILE_FORMATS.get(path.suffix.lower())
        if file_format is None:
            raise ValueError(f"Unsupported configuration file format: {path.suffix}")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f) if file_format == "yaml" else json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid {file_format.upper()} in {file_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading {file_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Top level of {file_path} must be a mapping, "
                             f"got {type(data).__name__}")
        return data

    def save_config(self, config: ApplicationConfig, file_path: str, format: str = "yaml") -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save
            file_path: Output file path
            format: File format (yaml or json)
        """
        file_format = format.lower()
        if file_format not in ("yaml", "json"):
            raise ValueError(f"Unsupported format: {format}")

        data = config.to_dict()
        data.pop('config_file_path', None)

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                if file_format == "yaml":
                    yaml.safe_dump(data, f, default_flow_style=False, indent=2, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)
        except OSError as e:
            raise ValueError(f"Error writing {file_path}: {e}") from e

    def _apply_environment(self, data: Dict[str, Any]) -> None:
        """Replace values in ``data`` with those set in the environment."""
        environ = os.environ if self._environ is None else self._environ

        for suffix, (section, key, converter) in ENV_OVERRIDES.items():
            raw = environ.get(f"{self._env_prefix}{suffix}")
            if raw is None:
                continue

            target = data if section is None else data.setdefault(section, {})
            # A malformed section is left for validation to report
            if isinstance(target, dict):
                target[key] = converter(raw)
