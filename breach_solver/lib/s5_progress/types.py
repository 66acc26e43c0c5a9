"""Types pour le module s5_progress."""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ProgressEvent:
    """Notification périodique d'avancement de la recherche."""
    progress_fraction: float
    iterations_processed: int
    iterations_cap: int
    completions_found_so_far: int
    total_targets: int
    elapsed_seconds: float

    @property
    def percent(self) -> float:
        return self.progress_fraction * 100.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressEvent":
        return cls(
            progress_fraction=float(data["progress_fraction"]),
            iterations_processed=int(data["iterations_processed"]),
            iterations_cap=int(data["iterations_cap"]),
            completions_found_so_far=int(data["completions_found_so_far"]),
            total_targets=int(data["total_targets"]),
            elapsed_seconds=float(data["elapsed_seconds"]),
        )
