"""
Exception hierarchy for lifecycle event publishing.
"""

from typing import Any, Optional

from .events import ApplicationEvent, LifecyclePhase


class BootcastError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ListenerDeliveryError(BootcastError):
    """
    Raised when a listener fails while handling an event.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, listener: Any, event: ApplicationEvent, message: Optional[str] = None):
        self.listener = listener
        self.event = event
        super().__init__(
            message or f"Listener {listener!r} failed handling {event.name}")


class ApplicationLifecycleFailure(BootcastError):
    """Raised by the hosting application when its startup sequence fails."""

    def __init__(self, message: str, phase: Optional[LifecyclePhase] = None):
        self.phase = phase
        super().__init__(message)


class LifecycleStateError(BootcastError):
    """Raised when an operation is invalid for the current lifecycle state."""
    pass


class ListenerLoadError(BootcastError):
    """Raised when a configured listener cannot be imported or created."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot load listener '{path}': {reason}")
