"""
Listener interfaces for lifecycle event delivery.

Listeners receive every event published to the dispatcher they are registered
with and decide for themselves which event kinds they care about.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

from ..domain.events import ApplicationEvent

HIGHEST_PRECEDENCE = -(2 ** 31)
LOWEST_PRECEDENCE = 2 ** 31 - 1


class IApplicationListener(ABC):
    """Interface for components notified of lifecycle events."""

    priority: Optional[int] = None
    """Delivery order; lower values deliver first. None sorts last."""

    @abstractmethod
    def on_application_event(self, event: ApplicationEvent) -> None:
        """
        Handle a lifecycle event.

        Args:
            event: Event being delivered

        Raises:
            Exception: Any error is reported as a ListenerDeliveryError
                by the dispatcher.
        """
        pass

    def supports_event(self, event: ApplicationEvent) -> bool:
        """
        Check if this listener wants to receive the given event.

        Args:
            event: Event about to be delivered

        Returns:
            True if ``on_application_event`` should be called
        """
        return True


@runtime_checkable
class ContextAware(Protocol):
    """Capability of listeners that want a reference to the context."""

    def set_application_context(self, context: Any) -> None: ...


class IErrorHandler(ABC):
    """Policy invoked for listener errors instead of propagating them."""

    @abstractmethod
    def handle_error(self, error: BaseException) -> None:
        """
        Handle an error raised by a listener.

        Implementations must not raise.

        Args:
            error: The delivery error, with the listener error as its cause
        """
        pass


def get_priority(listener: Any) -> int:
    """Resolve the sort key for a listener, defaulting to lowest precedence."""
    priority = getattr(listener, 'priority', None)
    if priority is None:
        return LOWEST_PRECEDENCE
    return int(priority)


def supports(listener: Any, event: ApplicationEvent) -> bool:
    """Check whether a listener accepts an event, treating a missing check as yes."""
    check = getattr(listener, 'supports_event', None)
    if check is None:
        return True
    return bool(check(event))
