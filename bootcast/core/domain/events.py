"""
Lifecycle event domain models.

This module defines the immutable events published while a hosting
application moves through its startup phases. Every phase has exactly one
event kind; kinds differ by which optional fields are populated.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class LifecyclePhase(Enum):
    """Startup lifecycle phases in the order they are published."""
    STARTING = "starting"
    ENVIRONMENT_PREPARED = "environment_prepared"
    CONTEXT_PREPARED = "context_prepared"
    CONTEXT_LOADED = "context_loaded"
    STARTED = "started"
    RUNNING = "running"
    FAILED = "failed"

    @property
    def uses_context_dispatch(self) -> bool:
        """True for phases delivered through the context's own dispatch."""
        return self in (LifecyclePhase.STARTED, LifecyclePhase.RUNNING)

    @classmethod
    def ordered(cls) -> Tuple['LifecyclePhase', ...]:
        """Phases of a successful startup, in publication order."""
        return tuple(phase for phase in cls if phase is not cls.FAILED)


@dataclass(frozen=True)
class ApplicationEvent:
    """
    Immutable event describing one lifecycle transition.

    The application handle and the original invocation arguments are always
    present; ``environment``, ``context`` and ``exception`` are populated
    according to the phase.
    """

    phase: LifecyclePhase
    """Lifecycle phase this event reports."""

    application: Any
    """Hosting application handle."""

    args: Tuple[str, ...] = ()
    """Original invocation arguments."""

    environment: Any = None
    """Prepared environment (environment_prepared only)."""

    context: Any = None
    """Application context (context_prepared onwards)."""

    exception: Optional[BaseException] = None
    """Failure cause (failed only)."""

    timestamp: float = field(default_factory=time.time)
    """Unix timestamp when event was created."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Unique event identifier."""

    def __post_init__(self) -> None:
        """Validate event after creation."""
        if not isinstance(self.phase, LifecyclePhase):
            raise ValueError("Phase must be a LifecyclePhase enum value")

        if self.application is None:
            raise ValueError("Event application cannot be None")

        # Lists are accepted but stored as tuples to keep the event immutable
        if not isinstance(self.args, tuple):
            object.__setattr__(self, 'args', tuple(self.args))

    @property
    def name(self) -> str:
        """Event name, e.g. ``application.starting``."""
        return f"application.{self.phase.value}"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to a dictionary suitable for logging.

        Handles are rendered with ``repr`` since they are opaque here.
        """
        return {
            'name': self.name,
            'phase': self.phase.value,
            'application': repr(self.application),
            'args': list(self.args),
            'environment': None if self.environment is None else repr(self.environment),
            'context': None if self.context is None else repr(self.context),
            'exception': None if self.exception is None else repr(self.exception),
            'timestamp': self.timestamp,
            'event_id': self.event_id,
        }


@dataclass(frozen=True)
class ApplicationStartingEvent(ApplicationEvent):
    """Published as early as possible once the run has begun."""

    phase: LifecyclePhase = field(default=LifecyclePhase.STARTING, init=False)
    application: Any = None


@dataclass(frozen=True)
class ApplicationEnvironmentPreparedEvent(ApplicationEvent):
    """Published when the environment is ready for inspection and change."""

    phase: LifecyclePhase = field(default=LifecyclePhase.ENVIRONMENT_PREPARED, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.environment is None:
            raise ValueError("Environment prepared event requires an environment")


@dataclass(frozen=True)
class ApplicationContextInitializedEvent(ApplicationEvent):
    """Published once the context is created and initializers have run."""

    phase: LifecyclePhase = field(default=LifecyclePhase.CONTEXT_PREPARED, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.context is None:
            raise ValueError("Context initialized event requires a context")


@dataclass(frozen=True)
class ApplicationPreparedEvent(ApplicationEvent):
    """Published when the context is loaded but not yet refreshed."""

    phase: LifecyclePhase = field(default=LifecyclePhase.CONTEXT_LOADED, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.context is None:
            raise ValueError("Prepared event requires a context")


@dataclass(frozen=True)
class ApplicationStartedEvent(ApplicationEvent):
    """Published after the context is refreshed, before runners are called."""

    phase: LifecyclePhase = field(default=LifecyclePhase.STARTED, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.context is None:
            raise ValueError("Started event requires a context")


@dataclass(frozen=True)
class ApplicationReadyEvent(ApplicationEvent):
    """Published when the application is ready to service requests."""

    phase: LifecyclePhase = field(default=LifecyclePhase.RUNNING, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.context is None:
            raise ValueError("Ready event requires a context")


@dataclass(frozen=True)
class ApplicationFailedEvent(ApplicationEvent):
    """Published when the application fails to start. Context may be None."""

    phase: LifecyclePhase = field(default=LifecyclePhase.FAILED, init=False)
    application: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.exception is None:
            raise ValueError("Failed event requires an exception")
