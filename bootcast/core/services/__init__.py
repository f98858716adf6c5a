"""
Core services implementing lifecycle event delivery.
"""

from .multicaster import EventMulticaster, LoggingErrorHandler
from .run_listener import EventPublishingRunListener

__all__ = [
    "EventMulticaster",
    "LoggingErrorHandler",
    "EventPublishingRunListener",
]
