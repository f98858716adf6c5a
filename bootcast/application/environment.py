"""
Application environment: property values and active profiles.

The environment is prepared before the context exists, so listeners of the
environment prepared event may still inspect and change it.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..infrastructure.config.models import ApplicationConfig

logger = logging.getLogger(__name__)

PROPERTY_ENV_PREFIX = "BOOTCAST_PROPERTY_"
DEFAULT_PROFILE = "default"

_MISSING = object()


class Environment:
    """Mutable property store with profile support."""

    def __init__(self, properties: Optional[Mapping[str, Any]] = None,
                 active_profiles: Iterable[str] = ()) -> None:
        self._properties: Dict[str, Any] = dict(properties or {})
        self._active_profiles: List[str] = []
        for profile in active_profiles:
            self.add_active_profile(profile)

    @property
    def active_profiles(self) -> List[str]:
        return list(self._active_profiles)

    @property
    def property_names(self) -> List[str]:
        return sorted(self._properties)

    def add_active_profile(self, profile: str) -> None:
        profile = profile.strip()
        if not profile:
            raise ValueError("Profile name cannot be empty")
        if profile not in self._active_profiles:
            self._active_profiles.append(profile)

    def accepts_profiles(self, *profiles: str) -> bool:
        """
        Check whether any of the given profiles is active.

        With no active profile the ``default`` profile is considered active.
        A profile prefixed with ``!`` matches when that profile is not active.
        """
        active = self._active_profiles or [DEFAULT_PROFILE]
        for profile in profiles:
            if profile.startswith('!'):
                if profile[1:] not in active:
                    return True
            elif profile in active:
                return True
        return False

    def contains_property(self, key: str) -> bool:
        return key in self._properties

    def get_property(self, key: str, default: Any = None) -> Any:
        return self._properties.get(key, default)

    def get_required_property(self, key: str) -> Any:
        value = self._properties.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(f"Required property '{key}' is not set")
        return value

    def set_property(self, key: str, value: Any) -> None:
        self._properties[key] = value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._properties)

    @classmethod
    def from_config(cls, config: ApplicationConfig,
                    environ: Optional[Mapping[str, str]] = None) -> 'Environment':
        """
        Build an environment from configuration and environment variables.

        ``BOOTCAST_PROPERTY_SERVER_PORT=8080`` sets ``server.port``; values
        from environment variables override configured properties.
        """
        environ = os.environ if environ is None else environ

        properties: Dict[str, Any] = dict(config.properties)
        properties.setdefault('application.name', config.name)
        properties.setdefault('application.version', config.version)
        properties.setdefault('application.environment', config.environment)

        for name, value in environ.items():
            if name.startswith(PROPERTY_ENV_PREFIX) and len(name) > len(PROPERTY_ENV_PREFIX):
                key = name[len(PROPERTY_ENV_PREFIX):].lower().replace('_', '.')
                properties[key] = value

        environment = cls(properties, config.profiles)
        logger.debug(f"Prepared environment with {len(properties)} properties, "
                     f"profiles {environment.active_profiles or [DEFAULT_PROFILE]}")
        return environment

    def __repr__(self) -> str:
        return f"Environment(profiles={self._active_profiles}, properties={len(self._properties)})"
