"""Agrégation des solutions : une par ensemble distinct de daemons complétés."""

from typing import AbstractSet, Dict, List, Sequence, Tuple

from breach_solver.lib.s1_grid import PathNode
from .types import Solution


class SolutionAggregator:
    """Conserve, pour chaque ensemble de daemons complétés, le meilleur chemin."""

    def __init__(self):
        self._solutions: Dict[Tuple[int, ...], Solution] = {}
        self.best_count = 0
        self.replacements = 0

    def __len__(self) -> int:
        return len(self._solutions)

    def offer(
        self,
        path: Sequence[PathNode],
        completed: AbstractSet[int],
        iterations: int = 0,
        elapsed: float = 0.0,
    ) -> bool:
        """
        Propose un chemin pour son ensemble de daemons complétés.

        Remplace la solution stockée si elle est absente, si le nouveau chemin
        complète strictement plus de daemons, ou autant avec un chemin
        strictement plus court. Retourne True si la solution a été retenue.
        """
        key = tuple(sorted(completed))
        count = len(key)
        length = len(path)

        current = self._solutions.get(key)
        if current is not None:
            better = (
                count > current.completion_count
                or (count == current.completion_count and length < current.path_length)
            )
            if not better:
                return False
            self.replacements += 1

        self._solutions[key] = Solution(
            path=tuple(path),
            completed=key,
            iterations_processed=iterations,
            elapsed_seconds=elapsed,
        )
        if count > self.best_count:
            self.best_count = count
        return True

    def get(self, completed: AbstractSet[int]) -> Solution:
        return self._solutions[tuple(sorted(completed))]

    def ranked(self, max_solutions: int) -> List[Solution]:
        """Solutions avec au moins un daemon, triées (plus de daemons, puis plus court)."""
        candidates = [s for s in self._solutions.values() if s.completion_count > 0]
        candidates.sort(key=lambda s: (-s.completion_count, s.path_length))
        return candidates[:max_solutions]
