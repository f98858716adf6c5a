"""
Application context owned by the hosting application.

The context keeps its own listener registry and publishes events through its
own multicaster once refreshed.
"""

import logging
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from ..core.domain.events import ApplicationEvent
from ..core.domain.exceptions import LifecycleStateError
from ..core.interfaces.context import IApplicationContext
from ..core.services.multicaster import EventMulticaster
from .environment import Environment

logger = logging.getLogger(__name__)


class ContextState(Enum):
    """Context lifecycle states."""
    NEW = auto()     # Created, not yet refreshed
    ACTIVE = auto()  # Refreshed, publishing events
    CLOSED = auto()  # Closed after being active
    FAILED = auto()  # Broken, terminal


class ApplicationContext(IApplicationContext):
    """
    Default context implementation.

    Listeners may be added in any state but events can only be published
    while the context is active.
    """

    def __init__(self, environment: Optional[Environment] = None,
                 name: str = "application") -> None:
        self._name = name
        self._environment = environment or Environment()
        self._multicaster = EventMulticaster()
        self._beans: Dict[str, Any] = {}
        self._state = ContextState.NEW
        self._failure: Optional[BaseException] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def state(self) -> ContextState:
        return self._state

    @property
    def failure(self) -> Optional[BaseException]:
        """Exception recorded by ``mark_failed``."""
        return self._failure

    def is_active(self) -> bool:
        return self._state is ContextState.ACTIVE

    def add_listener(self, listener: Any) -> None:
        self._multicaster.add_listener(listener)

    def get_listeners(self) -> List[Any]:
        return self._multicaster.listeners

    def publish_event(self, event: ApplicationEvent) -> None:
        if not self.is_active():
            raise LifecycleStateError(
                f"Cannot publish {event.name}: context '{self._name}' is {self._state.name}")
        self._multicaster.multicast_event(event)

    def register_bean(self, name: str, bean: Any) -> None:
        if self._state in (ContextState.CLOSED, ContextState.FAILED):
            raise LifecycleStateError(
                f"Cannot register bean '{name}': context '{self._name}' is {self._state.name}")
        if name in self._beans:
            raise ValueError(f"Bean '{name}' is already registered")
        self._beans[name] = bean

    def get_bean(self, name: str) -> Any:
        try:
            return self._beans[name]
        except KeyError:
            raise KeyError(f"No bean named '{name}'") from None

    def contains_bean(self, name: str) -> bool:
        return name in self._beans

    @property
    def bean_names(self) -> List[str]:
        return list(self._beans)

    def refresh(self) -> None:
        """Activate the context. Only valid once, from the NEW state."""
        if self._state is not ContextState.NEW:
            raise LifecycleStateError(
                f"Context '{self._name}' cannot be refreshed from {self._state.name}")

        self._state = ContextState.ACTIVE
        logger.info(f"Context '{self._name}' refreshed with {len(self._beans)} beans "
                    f"and {len(self._multicaster.listeners)} listeners")

    def mark_failed(self, exception: BaseException) -> None:
        """Record a failure. Reachable from NEW or ACTIVE; terminal."""
        if self._state not in (ContextState.NEW, ContextState.ACTIVE):
            raise LifecycleStateError(
                f"Context '{self._name}' cannot fail from {self._state.name}")

        self._state = ContextState.FAILED
        self._failure = exception
        logger.debug(f"Context '{self._name}' marked failed: {exception}")

    def close(self) -> None:
        """Close an active context. Closing a non-active context does nothing."""
        if self._state is not ContextState.ACTIVE:
            return

        self._state = ContextState.CLOSED
        logger.info(f"Context '{self._name}' closed")

    def __repr__(self) -> str:
        return f"ApplicationContext(name={self._name!r}, state={self._state.name})"
