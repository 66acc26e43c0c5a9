"""Module s2_matcher : Appariement des daemons et élagage."""

from .matcher import CompletionMatcher, completed, could_still_complete

__all__ = [
    "CompletionMatcher",
    "completed",
    "could_still_complete",
]
