"""
Synchronous event multicaster.

This module provides the in-process broadcaster used to deliver lifecycle
events before an application context is able to dispatch them itself.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ..domain.events import ApplicationEvent
from ..domain.exceptions import ListenerDeliveryError
from ..interfaces.listeners import IErrorHandler, get_priority, supports

logger = logging.getLogger(__name__)


class LoggingErrorHandler(IErrorHandler):
    """Error handler that reports listener errors as warnings."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._logger = log or logger

    def handle_error(self, error: BaseException) -> None:
        self._logger.warning("Error calling application listener: %s", error, exc_info=error)


class EventMulticaster:
    """
    Broadcasts events to an ordered, private set of listeners.

    Listeners are called synchronously on the calling thread, sorted by
    priority (lower first) with ties kept in registration order. Without an
    error handler the first listener error aborts delivery.
    """

    def __init__(self, error_handler: Optional[IErrorHandler] = None) -> None:
        self._listeners: List[Any] = []
        self._error_handler = error_handler

        # Metrics
        self._metrics: Dict[str, Any] = {
            'events_multicast': 0,
            'deliveries': 0,
            'delivery_failures': 0,
            'last_duration': 0.0,
        }

    @property
    def listeners(self) -> List[Any]:
        """Registered listeners in delivery order."""
        return list(self._listeners)

    @property
    def error_handler(self) -> Optional[IErrorHandler]:
        """Currently installed error handler, if any."""
        return self._error_handler

    def set_error_handler(self, error_handler: Optional[IErrorHandler]) -> None:
        """
        Install the policy used for listener errors.

        Args:
            error_handler: Handler to report errors to and continue, or None
                to propagate the first error
        """
        self._error_handler = error_handler

    def add_listener(self, listener: Any) -> None:
        """
        Register a listener. Registering the same instance again is a no-op.

        Args:
            listener: Object exposing ``on_application_event(event)``

        Raises:
            TypeError: If the listener cannot receive events
        """
        if not callable(getattr(listener, 'on_application_event', None)):
            raise TypeError(f"{listener!r} does not implement on_application_event")

        if self.contains(listener):
            return

        self._listeners.append(listener)
        self._listeners.sort(key=get_priority)

        logger.debug(f"Added listener {type(listener).__name__} "
                     f"(priority {get_priority(listener)})")

    def remove_listener(self, listener: Any) -> bool:
        """Remove a listener by identity. Returns True if it was registered."""
        for i, registered in enumerate(self._listeners):
            if registered is listener:
                self._listeners.pop(i)
                return True
        return False

    def remove_all_listeners(self) -> None:
        """Remove every registered listener."""
        self._listeners.clear()

    def contains(self, listener: Any) -> bool:
        """Check whether this exact listener instance is registered."""
        return any(registered is listener for registered in self._listeners)

    def multicast_event(self, event: ApplicationEvent) -> None:
        """
        Deliver an event to every listener that supports it.

        Args:
            event: Event to deliver

        Raises:
            ListenerDeliveryError: If a listener fails and no error handler
                is installed
        """
        start_time = time.time()
        self._metrics['events_multicast'] += 1

        # Iterate over a copy so listeners may register others while handling
        for listener in list(self._listeners):
            try:
                if not supports(listener, event):
                    continue
                listener.on_application_event(event)
                self._metrics['deliveries'] += 1
            except Exception as e:
                self._metrics['delivery_failures'] += 1
                error = ListenerDeliveryError(listener, event)

                if self._error_handler is None:
                    logger.debug(f"Listener error for {event.name} aborts delivery: {e}")
                    raise error from e

                error.__cause__ = e
                self._error_handler.handle_error(error)

        self._metrics['last_duration'] = time.time() - start_time
        logger.debug(f"Multicast {event.name} to {len(self._listeners)} listeners")

    def get_metrics(self) -> Dict[str, Any]:
        """Get multicaster metrics."""
        return {
            **self._metrics,
            'listeners_count': len(self._listeners),
            'error_handler': type(self._error_handler).__name__ if self._error_handler else None,
        }
