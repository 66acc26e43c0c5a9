"""Module s5_progress : Notifications de progression."""

from .types import ProgressEvent
from .reporter import ProgressReporter, ProgressSink

__all__ = [
    "ProgressEvent",
    "ProgressReporter",
    "ProgressSink",
]
