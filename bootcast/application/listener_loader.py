"""
Instantiate listeners declared in configuration.
"""

import importlib
import logging
from typing import Any, Iterable, List

from ..core.domain.exceptions import ListenerLoadError
from ..infrastructure.config.models import ListenerConfig

logger = logging.getLogger(__name__)


def import_object(path: str) -> Any:
    """
    Resolve a ``package.module:attribute`` path to the object it names.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, sep, attr_path = path.partition(':')
    if not sep or not attr_path:
        raise ImportError(f"'{path}' is not a 'module:attribute' path")

    target: Any = importlib.import_module(module_name)
    for attr in attr_path.split('.'):
        target = getattr(target, attr)
    return target


def load_listener(config: ListenerConfig) -> Any:
    """
    Import and instantiate one listener.

    Args:
        config: Listener configuration with a ``module:attribute`` path

    Returns:
        Listener instance, with the configured priority applied

    Raises:
        ListenerLoadError: If the path cannot be resolved or the listener
            cannot be created
    """
    try:
        target = import_object(config.path)
    except ImportError as e:
        raise ListenerLoadError(config.path, f"cannot import: {e}") from e
    except AttributeError as e:
        raise ListenerLoadError(config.path, f"missing attribute: {e}") from e

    try:
        listener = target(**config.options)
    except Exception as e:
        raise ListenerLoadError(config.path, f"cannot instantiate: {e}") from e

    if not callable(getattr(listener, 'on_application_event', None)):
        raise ListenerLoadError(config.path, "object does not implement on_application_event")

    if config.priority is not None:
        listener.priority = config.priority

    logger.debug(f"Loaded listener {config.path}")
    return listener


def load_listeners(configs: Iterable[ListenerConfig]) -> List[Any]:
    """Load every enabled listener, keeping declaration order."""
    return [load_listener(config) for config in configs if config.enabled]
