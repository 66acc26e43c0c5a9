"""Émission périodique des notifications de progression."""

from typing import Callable, Optional

from .types import ProgressEvent

ProgressSink = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Publie un ProgressEvent toutes les `interval` itérations."""

    def __init__(self, sink: Optional[ProgressSink] = None, interval: int = 1000):
        self.sink = sink
        self.interval = interval
        self.last_reported = 0
        self.events_sent = 0

    def maybe_report(
        self,
        iterations: int,
        cap: int,
        best_count: int,
        total_targets: int,
        elapsed: float,
    ) -> Optional[ProgressEvent]:
        """Émet un événement si la cadence est atteinte ; retourne l'événement émis."""
        if self.sink is None or self.interval <= 0:
            return None
        if iterations - self.last_reported < self.interval:
            return None

        event = ProgressEvent(
            progress_fraction=min(iterations / cap, 1.0) if cap > 0 else 1.0,
            iterations_processed=iterations,
            iterations_cap=cap,
            completions_found_so_far=best_count,
            total_targets=total_targets,
            elapsed_seconds=elapsed,
        )
        self.sink(event)
        self.last_reported = iterations
        self.events_sent += 1
        return event
