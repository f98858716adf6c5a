"""
Ready-made lifecycle listeners.
"""

from .builtin import StartupTimingListener, FailureReportingListener, PhaseRecordingListener

__all__ = [
    "StartupTimingListener",
    "FailureReportingListener",
    "PhaseRecordingListener",
]
