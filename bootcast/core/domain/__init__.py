"""
Domain models for lifecycle events and their errors.
"""

from .events import (
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
from .exceptions import (
    BootcastError,
    ListenerDeliveryError,
    ApplicationLifecycleFailure,
    LifecycleStateError,
    ListenerLoadError,
)

__all__ = [
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
]
