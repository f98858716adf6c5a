"""
Run listener interface.

A run listener is called by the hosting application once per startup phase,
in a fixed order, on the calling thread.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IRunListener(ABC):
    """Interface for components following an application run phase by phase."""

    @abstractmethod
    def starting(self) -> None:
        """Called immediately when the run has started."""
        pass

    @abstractmethod
    def environment_prepared(self, environment: Any) -> None:
        """Called once the environment is prepared, before the context exists."""
        pass

    @abstractmethod
    def context_prepared(self, context: Any) -> None:
        """Called once the context is created and initialized, before loading."""
        pass

    @abstractmethod
    def context_loaded(self, context: Any) -> None:
        """Called once the context is loaded, before it is refreshed."""
        pass

    @abstractmethod
    def started(self, context: Any) -> None:
        """Called once the context is refreshed, before runners are called."""
        pass

    @abstractmethod
    def running(self, context: Any) -> None:
        """Called when the run completes and the application is ready."""
        pass

    @abstractmethod
    def failed(self, context: Optional[Any], exception: BaseException) -> None:
        """
        Called when a failure occurs while running the application.

        Args:
            context: The context, or None if it was never created
            exception: The failure cause
        """
        pass
