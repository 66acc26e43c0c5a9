"""Module s4_aggregator : Agrégation et classement des solutions."""

from .types import Solution, SolveResult
from .aggregator import SolutionAggregator

__all__ = [
    # Types
    "Solution",
    "SolveResult",
    # Agrégateur
    "SolutionAggregator",
]
