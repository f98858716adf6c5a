"""
Core module containing lifecycle event models, interfaces and publishing logic.

This module is independent of configuration, logging setup and the command
line interface.
"""

from .interfaces.listeners import IApplicationListener, ContextAware, IErrorHandler
from .interfaces.context import IApplicationContext, ListenerSource
from .interfaces.run_listener import IRunListener
from .domain.events import ApplicationEvent, LifecyclePhase
from .domain.exceptions import (
    BootcastError,
    ListenerDeliveryError,
    ApplicationLifecycleFailure,
    LifecycleStateError,
)
from .services.multicaster import EventMulticaster, LoggingErrorHandler
from .services.run_listener import EventPublishingRunListener

__all__ = [
    "IApplicationListener",
    "ContextAware",
    "IErrorHandler",
    "IApplicationContext",
    "ListenerSource",
    "IRunListener",
    "ApplicationEvent",
    "LifecyclePhase",
    "BootcastError",
    "ListenerDeliveryError",
    "ApplicationLifecycleFailure",
    "LifecycleStateError",
    "EventMulticaster",
    "LoggingErrorHandler",
    "EventPublishingRunListener",
]
