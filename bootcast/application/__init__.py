"""
Application layer: the hosting application, its context and environment.
"""

from .application import Application
from .context import ApplicationContext, ContextState
from .environment import Environment
from .listener_loader import import_object, load_listener, load_listeners

__all__ = [
    "Application",
    "ApplicationContext",
    "ContextState",
    "Environment",
    "import_object",
    "load_listener",
    "load_listeners",
]
