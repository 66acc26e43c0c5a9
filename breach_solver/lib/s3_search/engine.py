"""Moteur de recherche : exploration des chemins sous la règle d'alternance d'axe."""

import time
from collections import deque
from typing import Deque, List, Optional

from breach_solver.config import PRUNING_MIN_LENGTH
from breach_solver.lib.s1_grid import Grid
from breach_solver.lib.s2_matcher import CompletionMatcher
from breach_solver.lib.s4_aggregator import SolutionAggregator, SolveResult
from breach_solver.lib.s5_progress import ProgressReporter, ProgressSink
from .types import SolveRequest, TraversalState
from .visited import VisitedStateTable


class SearchEngine:
    """
    Recherche heuristique bornée du chemin complétant le plus de daemons.

    La file est traitée en FIFO et re-triée toutes les `reorder_interval`
    itérations (plus de daemons complétés d'abord, puis chemin le plus court).
    Une itération = un état retiré de la file, y compris s'il est dominé.
    """

    def __init__(self, request: SolveRequest, on_progress: Optional[ProgressSink] = None):
        self.request = request
        self.grid = Grid.from_flat(request.grid, request.width, request.height)
        self.matcher = CompletionMatcher(request.daemon_sequences, request.symbols)
        self.reporter = ProgressReporter(on_progress, request.progress_interval)
        self.aggregator = SolutionAggregator()
        self.visited = VisitedStateTable()
        self.queue: Deque[TraversalState] = deque()
        self.iterations = 0
        self.pruned_count = 0

    def _initial_states(self) -> List[TraversalState]:
        states = []
        for node in self.grid.start_nodes():
            completed = self.matcher.completed([node.value])
            states.append(TraversalState.start(node, self.request.buffer_size, completed))
        return states

    def _reorder(self) -> None:
        self.queue = deque(sorted(self.queue, key=lambda s: (-len(s.completed), s.length)))

    def _expand(self, current: TraversalState) -> None:
        for move in self.grid.candidates(current.row, current.col, current.axis, current.visited):
            values = current.values + [move.value]
            completed = self.matcher.completed(values)

            if (
                self.request.prune_dead_branches
                and current.length > PRUNING_MIN_LENGTH
                and len(completed) <= len(current.completed)
                and not self.matcher.could_still_complete(values, current.completed)
            ):
                self.pruned_count += 1
                continue

            self.queue.append(current.extend(move, completed))

    def run(self) -> SolveResult:
        """Exécute la recherche jusqu'à épuisement de la file ou du budget."""
        request = self.request
        total_targets = request.total_targets
        start_time = time.perf_counter()
        stopped_early = False

        self.queue = deque(self._initial_states())
        last_reorder = 0

        while self.queue and self.iterations < request.max_iterations:
            self.reporter.maybe_report(
                self.iterations,
                request.max_iterations,
                self.aggregator.best_count,
                total_targets,
                time.perf_counter() - start_time,
            )

            if request.reorder_interval > 0 and self.iterations - last_reorder >= request.reorder_interval:
                self._reorder()
                last_reorder = self.iterations

            current = self.queue.popleft()
            self.iterations += 1

            completed = self.matcher.completed(current.values)
            count = len(completed)
            self.aggregator.offer(
                current.path,
                completed,
                iterations=self.iterations,
                elapsed=time.perf_counter() - start_time,
            )

            if not self.visited.check_and_record(current.key(self.grid.width), count, current.length):
                continue

            if request.stop_on_full_completion and total_targets and count == total_targets:
                stopped_early = True
                break

            if current.remaining_moves > 0:
                self._expand(current)

        return SolveResult(
            solutions=self.aggregator.ranked(request.max_solutions),
            iterations_processed=self.iterations,
            elapsed_seconds=time.perf_counter() - start_time,
            total_targets=total_targets,
            stopped_early=stopped_early,
        )


# === API fonctionnelle ===

def solve(request: SolveRequest, on_progress: Optional[ProgressSink] = None) -> SolveResult:
    """Résout un puzzle (API fonctionnelle)."""
    return SearchEngine(request, on_progress).run()
