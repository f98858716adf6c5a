"""
Application context interfaces.

The context is owned by the hosting application. Event publishing only needs
to ask whether it is active, publish through it and register listeners in it.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Protocol, runtime_checkable

from ..domain.events import ApplicationEvent


class IApplicationContext(ABC):
    """Interface for contexts able to dispatch events themselves."""

    @abstractmethod
    def is_active(self) -> bool:
        """
        Check whether the context has been refreshed and not closed.

        Returns:
            True if ``publish_event`` can be used
        """
        pass

    @abstractmethod
    def publish_event(self, event: ApplicationEvent) -> None:
        """
        Publish an event to every listener registered in this context.

        Args:
            event: Event to publish
        """
        pass

    @abstractmethod
    def add_listener(self, listener: Any) -> None:
        """
        Register a listener in this context's own registry.

        Args:
            listener: Listener to register
        """
        pass


@runtime_checkable
class ListenerSource(Protocol):
    """Capability of contexts that can list the listeners they hold."""

    def get_listeners(self) -> List[Any]: ...
