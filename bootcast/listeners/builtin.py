"""
Built-in lifecycle listeners.

These can be declared in configuration, e.g.
``bootcast.listeners.builtin:StartupTimingListener``.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ..core.domain.events import ApplicationEvent, ApplicationFailedEvent, LifecyclePhase
from ..core.interfaces.listeners import HIGHEST_PRECEDENCE, IApplicationListener

logger = logging.getLogger(__name__)


class StartupTimingListener(IApplicationListener):
    """Logs the time elapsed since ``starting`` at every phase."""

    priority = HIGHEST_PRECEDENCE

    def __init__(self, log_level: str = "INFO") -> None:
        self._level = logging.getLevelName(log_level.upper())
        if not isinstance(self._level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        self._started_at: Optional[float] = None
        self.timings: Dict[LifecyclePhase, float] = {}

    def on_application_event(self, event: ApplicationEvent) -> None:
        now = time.perf_counter()
        if event.phase is LifecyclePhase.STARTING or self._started_at is None:
            self._started_at = now
            self.timings.clear()

        elapsed = now - self._started_at
        self.timings[event.phase] = elapsed
        logger.log(self._level, f"{event.name} after {elapsed * 1000:.1f} ms")


class FailureReportingListener(IApplicationListener):
    """
    Logs the cause of a failed startup.

    Only failed events are accepted. The context bound when the context is
    loaded is kept so the report can name it even if the failed event has no
    context.
    """

    def __init__(self) -> None:
        self.context: Any = None
        self.last_failure: Optional[ApplicationFailedEvent] = None

    def set_application_context(self, context: Any) -> None:
        self.context = context

    def supports_event(self, event: ApplicationEvent) -> bool:
        return event.phase is LifecyclePhase.FAILED

    def on_application_event(self, event: ApplicationEvent) -> None:
        self.last_failure = event  # type: ignore[assignment]
        context = event.context if event.context is not None else self.context
        logger.error(f"Application {event.application!r} failed "
                     f"(context: {context!r}): {event.exception!r}")


class PhaseRecordingListener(IApplicationListener):
    """Keeps the phases it has seen, in order."""

    def __init__(self, priority: Optional[int] = None) -> None:
        self.priority = priority
        self.phases: List[LifecyclePhase] = []
        self.events: List[ApplicationEvent] = []

    def on_application_event(self, event: ApplicationEvent) -> None:
        self.phases.append(event.phase)
        self.events.append(event)
