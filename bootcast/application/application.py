"""
Hosting application that drives the startup lifecycle.

This module runs an application through its phases in a fixed order,
notifying listeners of each phase through an EventPublishingRunListener and
reporting failures to them before re-raising.
"""

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

from ..core.domain.events import LifecyclePhase
from ..core.domain.exceptions import ApplicationLifecycleFailure
from ..core.interfaces.listeners import IErrorHandler
from ..core.interfaces.run_listener import IRunListener
from ..core.services.run_listener import EventPublishingRunListener
from ..infrastructure.config.models import ApplicationConfig
from .context import ApplicationContext, ContextState
from .environment import Environment
from .listener_loader import load_listeners

logger = logging.getLogger(__name__)

Initializer = Callable[[ApplicationContext], None]
Runner = Callable[[ApplicationContext, Sequence[str]], None]


class Application:
    """
    Runs the startup sequence and publishes its lifecycle events.

    Listeners are captured when ``run`` begins; listeners added while a run
    is in progress only take part in later runs.
    """

    def __init__(self, listeners: Optional[Sequence[Any]] = None,
                 name: Optional[str] = None,
                 config: Optional[ApplicationConfig] = None,
                 error_handler: Optional[IErrorHandler] = None,
                 context_factory: Optional[Callable[[Environment, str], ApplicationContext]] = None) -> None:
        self._config = config or ApplicationConfig()
        self._name = name or self._config.name
        self._listeners: List[Any] = list(listeners or [])
        self._initializers: List[Initializer] = []
        self._runners: List[Runner] = []
        self._error_handler = error_handler
        self._context_factory = context_factory or (
            lambda environment, context_name: ApplicationContext(environment, context_name))

    @classmethod
    def from_config(cls, config: ApplicationConfig, **kwargs: Any) -> 'Application':
        """Create an application with the listeners declared in configuration."""
        listeners = load_listeners(config.enabled_listeners())
        return cls(listeners=listeners, config=config, **kwargs)

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> ApplicationConfig:
        return self._config

    @property
    def listeners(self) -> List[Any]:
        """Registered listeners in registration order."""
        return list(self._listeners)

    def add_listeners(self, *listeners: Any) -> None:
        self._listeners.extend(listeners)

    def add_initializers(self, *initializers: Initializer) -> None:
        self._initializers.extend(initializers)

    def add_runners(self, *runners: Runner) -> None:
        self._runners.extend(runners)

    def run(self, args: Sequence[str] = ()) -> ApplicationContext:
        """
        Run the application.

        Args:
            args: Invocation arguments, passed to events and runners

        Returns:
            The refreshed, running context

        Raises:
            ApplicationLifecycleFailure: If any phase fails. Listeners have
                been sent the failed event by then.
        """
        start_time = time.perf_counter()
        args = tuple(args)
        run_listener = self._create_run_listener(args)
        context: Optional[ApplicationContext] = None
        phase = LifecyclePhase.STARTING

        try:
            run_listener.starting()

            phase = LifecyclePhase.ENVIRONMENT_PREPARED
            environment = self._prepare_environment()
            run_listener.environment_prepared(environment)

            phase = LifecyclePhase.CONTEXT_PREPARED
            context = self._context_factory(environment, self._name)
            self._apply_initializers(context)
            run_listener.context_prepared(context)

            phase = LifecyclePhase.CONTEXT_LOADED
            run_listener.context_loaded(context)

            phase = LifecyclePhase.STARTED
            context.refresh()
            run_listener.started(context)
            self._call_runners(context, args)

            phase = LifecyclePhase.RUNNING
            run_listener.running(context)
        except Exception as e:
            self._handle_run_failure(context, e, run_listener)
            raise ApplicationLifecycleFailure(
                f"Application '{self._name}' failed during {phase.value}: {e}",
                phase=phase) from e

        elapsed = time.perf_counter() - start_time
        logger.info(f"Started {self._name} in {elapsed:.3f} seconds")
        return context

    def _create_run_listener(self, args: Sequence[str]) -> IRunListener:
        return EventPublishingRunListener(self, args, error_handler=self._error_handler)

    def _prepare_environment(self) -> Environment:
        return Environment.from_config(self._config)

    def _apply_initializers(self, context: ApplicationContext) -> None:
        for initializer in self._initializers:
            initializer(context)

    def _call_runners(self, context: ApplicationContext, args: Sequence[str]) -> None:
        for runner in self._runners:
            logger.debug(f"Calling runner {getattr(runner, '__name__', runner)!r}")
            runner(context, args)

    def _handle_run_failure(self, context: Optional[ApplicationContext],
                            exception: Exception, run_listener: IRunListener) -> None:
        logger.error(f"Application run failed: {exception}")

        if context is not None and context.state is ContextState.NEW:
            context.mark_failed(exception)

        try:
            run_listener.failed(context, exception)
        except Exception as report_error:
            logger.warning(f"Unable to report application failure: {report_error}",
                           exc_info=report_error)
        finally:
            if context is not None:
                context.close()

    def __repr__(self) -> str:
        return f"Application(name={self._name!r}, listeners={len(self._listeners)})"
