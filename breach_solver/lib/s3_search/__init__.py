"""Module s3_search : Moteur de recherche de chemins."""

from .types import SolveRequest, StateKey, TraversalState, VisitedEntry
from .visited import VisitedStateTable
from .engine import SearchEngine, solve

__all__ = [
    # Types
    "SolveRequest",
    "StateKey",
    "TraversalState",
    "VisitedEntry",
    # Moteur
    "VisitedStateTable",
    "SearchEngine",
    "solve",
]
