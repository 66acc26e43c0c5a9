"""Module s7_debug : Logs structurés des résolutions."""

from .logger import DebugLogger, log_solve, log_progress

__all__ = [
    "DebugLogger",
    "log_solve",
    "log_progress",
]
