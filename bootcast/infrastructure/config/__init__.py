"""
Configuration management infrastructure.

This module provides configuration loading and validation for the hosting
application and its listeners.
"""

from .models import ApplicationConfig, ListenerConfig, LoggingConfig
from .loader import ConfigLoader

__all__ = [
    "ApplicationConfig",
    "ListenerConfig",
    "LoggingConfig",
    "ConfigLoader",
]
