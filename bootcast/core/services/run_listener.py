"""
Run listener that publishes lifecycle events.

Events fired before the context is loaded go through a private multicaster
seeded from the application's listeners. At ``context_loaded`` those listeners
are handed over to the context, and later events are published through the
context itself.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence

from ..domain.events import (
    ApplicationContextInitializedEvent,
    ApplicationEnvironmentPreparedEvent,
    ApplicationFailedEvent,
    ApplicationPreparedEvent,
    ApplicationReadyEvent,
    ApplicationStartedEvent,
    ApplicationStartingEvent,
)
from ..interfaces.context import ListenerSource
from ..interfaces.listeners import ContextAware, IErrorHandler
from ..interfaces.run_listener import IRunListener
from .multicaster import EventMulticaster, LoggingErrorHandler

logger = logging.getLogger(__name__)


class EventPublishingRunListener(IRunListener):
    """
    Publishes one event per startup phase to the application's listeners.

    The listener list is a snapshot taken here; listeners added to the
    application afterwards are not seen by the initial multicaster.
    """

    def __init__(self, application: Any, args: Sequence[str] = (),
                 error_handler: Optional[IErrorHandler] = None) -> None:
        self._application = application
        self._args = tuple(args)
        self._failure_error_handler = error_handler or LoggingErrorHandler()
        self._listeners: List[Any] = list(application.listeners)
        self._initial_multicaster = EventMulticaster()
        for listener in self._listeners:
            self._initial_multicaster.add_listener(listener)

    @property
    def application(self) -> Any:
        return self._application

    @property
    def args(self) -> tuple:
        return self._args

    @property
    def initial_multicaster(self) -> EventMulticaster:
        """Multicaster used before the context can publish events."""
        return self._initial_multicaster

    def starting(self) -> None:
        self._initial_multicaster.multicast_event(ApplicationStartingEvent(
            application=self._application, args=self._args))

    def environment_prepared(self, environment: Any) -> None:
        self._initial_multicaster.multicast_event(ApplicationEnvironmentPreparedEvent(
            application=self._application, args=self._args, environment=environment))

    def context_prepared(self, context: Any) -> None:
        self._initial_multicaster.multicast_event(ApplicationContextInitializedEvent(
            application=self._application, args=self._args, context=context))

    def context_loaded(self, context: Any) -> None:
        # From here on the context is the source of truth for delivery
        for listener in self._listeners:
            if isinstance(listener, ContextAware):
                listener.set_application_context(context)
            context.add_listener(listener)

        logger.debug(f"Registered {len(self._listeners)} listeners with the context")

        self._initial_multicaster.multicast_event(ApplicationPreparedEvent(
            application=self._application, args=self._args, context=context))

    def started(self, context: Any) -> None:
        context.publish_event(ApplicationStartedEvent(
            application=self._application, args=self._args, context=context))

    def running(self, context: Any) -> None:
        context.publish_event(ApplicationReadyEvent(
            application=self._application, args=self._args, context=context))

    def failed(self, context: Optional[Any], exception: BaseException) -> None:
        event = ApplicationFailedEvent(
            application=self._application, args=self._args,
            context=context, exception=exception)

        if context is not None and context.is_active():
            # Listeners have been registered with the context, so use it
            context.publish_event(event)
            return

        # An inactive context may not be able to publish, so call its
        # listeners through the initial multicaster instead
        if isinstance(context, ListenerSource):
            self._add_listeners(context.get_listeners())

        self._initial_multicaster.set_error_handler(self._failure_error_handler)
        logger.debug("Publishing failure through the initial multicaster")
        self._initial_multicaster.multicast_event(event)

    def _add_listeners(self, listeners: Iterable[Any]) -> None:
        for listener in listeners:
            self._initial_multicaster.add_listener(listener)
