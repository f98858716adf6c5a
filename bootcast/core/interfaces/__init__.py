"""
Core interfaces defining the contracts between the event publisher and its
collaborators.
"""

from .listeners import (
    IApplicationListener,
    ContextAware,
    IErrorHandler,
    HIGHEST_PRECEDENCE,
    LOWEST_PRECEDENCE,
    get_priority,
    supports,
)
from .context import IApplicationContext, ListenerSource
from .run_listener import IRunListener

__all__ = [
    "IApplicationListener",
    "ContextAware",
    "IErrorHandler",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "get_priority",
    "supports",
    "IApplicationContext",
    "ListenerSource",
    "IRunListener",
]
