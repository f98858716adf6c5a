"""
Configuration models and data structures.

This module defines the configuration models used by the hosting application,
providing type safety and validation for configuration values.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = ("<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                   "<level>{level: <8}</level> | "
                   "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                   "<level>{message}</level>")
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False
    intercept_standard_logging: bool = True


@dataclass
class ListenerConfig:
    """A listener to instantiate from an import path."""
    path: str = ""
    priority: Optional[int] = None
    enabled: bool = True
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the import path format."""
        module_name, sep, attr = self.path.partition(':')
        if not sep or not module_name or not attr:
            raise ValueError(
                f"Listener path must look like 'package.module:ClassName', got '{self.path}'")


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    # Basic application settings
    name: str = "bootcast"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "production"
    profiles: List[str] = field(default_factory=list)

    # Property values exposed through the Environment
    properties: Dict[str, Any] = field(default_factory=dict)

    # Component configurations
    listeners: List[ListenerConfig] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Additional settings
    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_logging()
        self._validate_profiles()

    def _validate_logging(self) -> None:
        """Validate logging settings."""
        level = self.logging.level
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.logging.level}")

        if self.logging.backup_count < 0:
            raise ValueError(
                f"Log backup count must not be negative, got {self.logging.backup_count}")

    def _validate_profiles(self) -> None:
        """Validate profile names."""
        for profile in self.profiles:
            if not profile or not profile.strip():
                raise ValueError("Profile names cannot be empty")

    def enabled_listeners(self) -> List[ListenerConfig]:
        """Listener configurations that are switched on, in declared order."""
        return [listener for listener in self.listeners if listener.enabled]

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ApplicationConfig':
        """
        Create configuration from dictionary.

        Raises:
            ValueError: If a section has the wrong shape or contains a key
                that is not a known setting
        """
        _require_mapping(data, "configuration")
        _reject_unknown_keys(cls, data, "configuration")

        # Extract nested configurations
        logging_data = data.get('logging', {})
        _require_mapping(logging_data, "'logging'")
        _reject_unknown_keys(LoggingConfig, logging_data, "'logging'")
        logging_config = LoggingConfig(**logging_data)

        listener_items = data.get('listeners', [])
        if not isinstance(listener_items, list):
            raise ValueError(f"'listeners' must be a list, got {type(listener_items).__name__}")
        listener_configs = [_listener_from_item(item, i) for i, item in enumerate(listener_items)]

        properties = data.get('properties', {})
        _require_mapping(properties, "'properties'")

        profiles = data.get('profiles', [])
        if isinstance(profiles, str):
            profiles = [p.strip() for p in profiles.split(',') if p.strip()]
        elif not isinstance(profiles, list):
            raise ValueError(f"'profiles' must be a list or a comma separated string, "
                             f"got {type(profiles).__name__}")

        # Create main configuration
        return cls(
            name=data.get('name', 'bootcast'),
            version=data.get('version', '0.1.0'),
            debug=data.get('debug', False),
            environment=data.get('environment', 'production'),
            profiles=list(profiles),
            properties=dict(properties),
            listeners=listener_configs,
            logging=logging_config,
            config_file_path=data.get('config_file_path'),
        )


def _require_mapping(value: Any, where: str) -> None:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where} must be a mapping, got {type(value).__name__}")


def _reject_unknown_keys(model: type, data: Mapping[str, Any], where: str) -> None:
    """Raise ValueError naming every key of ``data`` that ``model`` has no field for."""
    known = {f.name for f in fields(model)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ValueError(f"Unknown setting(s) in {where}: {', '.join(unknown)}")


def _listener_from_item(item: Any, index: int) -> ListenerConfig:
    """Build a listener entry, given either as a path string or a mapping."""
    if isinstance(item, str):
        return ListenerConfig(path=item)

    where = f"'listeners[{index}]'"
    _require_mapping(item, where)
    _reject_unknown_keys(ListenerConfig, item, where)
    if 'path' not in item:
        raise ValueError(f"{where} is missing 'path'")
    return ListenerConfig(**item)
