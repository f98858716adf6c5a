"""
Bootcast - startup lifecycle event publishing.

This package runs an application through a fixed sequence of startup phases
and delivers one event per phase to every registered listener, first through
a private multicaster and then through the application context itself.
"""

__version__ = "0.1.0"

# Public API exports
from .core.interfaces.listeners import IApplicationListener, ContextAware, IErrorHandler
from .core.interfaces.context import IApplicationContext, ListenerSource
from .core.interfaces.run_listener import IRunListener
from .core.domain.events import (
    LifecyclePhase,
    ApplicationEvent,
    ApplicationStartingEvent,
    ApplicationEnvironmentPreparedEvent,
    ApplicationContextInitializedEvent,
    ApplicationPreparedEvent,
    ApplicationStartedEvent,
    ApplicationReadyEvent,
    ApplicationFailedEvent,
)
from .core.domain.exceptions import (
    BootcastError,
    ListenerDeliveryError,
    ApplicationLifecycleFailure,
    LifecycleStateError,
    ListenerLoadError,
)
from .core.services.multicaster import EventMulticaster, LoggingErrorHandler
from .core.services.run_listener import EventPublishingRunListener
from .application import Application, ApplicationContext, Environment

__all__ = [
    "IApplicationListener",
    "ContextAware",
    "IErrorHandler",
    "IApplicationContext",
    "ListenerSource",
    "IRunListener",
    "LifecyclePhase",
    "ApplicationEvent",
    "ApplicationStartingEvent",
    "ApplicationEnvironmentPreparedEvent",
    "ApplicationContextInitializedEvent",
    "ApplicationPreparedEvent",
    "ApplicationStartedEvent",
    "ApplicationReadyEvent",
    "ApplicationFailedEvent",
    "BootcastError",
    "ListenerDeliveryError",
    "ApplicationLifecycleFailure",
    "LifecycleStateError",
    "ListenerLoadError",
    "EventMulticaster",
    "LoggingErrorHandler",
    "EventPublishingRunListener",
    "Application",
    "ApplicationContext",
    "Environment",
]
