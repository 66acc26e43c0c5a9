"""Types pour le module s4_aggregator."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from breach_solver.lib.s1_grid import PathNode


@dataclass(frozen=True)
class Solution:
    """Instantané immuable du meilleur chemin pour un ensemble de daemons complétés."""
    path: Tuple[PathNode, ...]
    completed: Tuple[int, ...]
    iterations_processed: int = 0
    elapsed_seconds: float = 0.0

    @property
    def completion_count(self) -> int:
        return len(self.completed)

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def path_coordinates(self) -> List[Tuple[int, int]]:
        return [node.cell for node in self.path]

    @property
    def path_values(self) -> List[int]:
        return [node.value for node in self.path]

    def format_coords(self) -> str:
        """Coordonnées au format "row,col;row,col"."""
        return ";".join(f"{row},{col}" for row, col in self.path_coordinates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path_coordinates": [list(c) for c in self.path_coordinates],
            "path_values": self.path_values,
            "completed_target_indices": list(self.completed),
            "completion_count": self.completion_count,
            "path_length": self.path_length,
            "iterations_processed": self.iterations_processed,
            "elapsed_seconds": self.elapsed_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Solution":
        path = tuple(
            PathNode(row=int(row), col=int(col), value=int(value))
            for (row, col), value in zip(data["path_coordinates"], data["path_values"])
        )
        return cls(
            path=path,
            completed=tuple(int(i) for i in data["completed_target_indices"]),
            iterations_processed=int(data.get("iterations_processed", 0)),
            elapsed_seconds=float(data.get("elapsed_seconds", 0.0)),
        )


@dataclass
class SolveResult:
    """Résultat final d'une résolution."""
    solutions: List[Solution] = field(default_factory=list)
    iterations_processed: int = 0
    elapsed_seconds: float = 0.0
    total_targets: int = 0
    stopped_early: bool = False

    @property
    def has_solutions(self) -> bool:
        return len(self.solutions) > 0

    @property
    def best(self) -> Optional[Solution]:
        return self.solutions[0] if self.solutions else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solutions": [s.to_dict() for s in self.solutions],
            "iterations_processed": self.iterations_processed,
            "elapsed_seconds": self.elapsed_seconds,
            "total_targets": self.total_targets,
            "stopped_early": self.stopped_early,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolveResult":
        return cls(
            solutions=[Solution.from_dict(s) for s in data.get("solutions", [])],
            iterations_processed=int(data.get("iterations_processed", 0)),
            elapsed_seconds=float(data.get("elapsed_seconds", 0.0)),
            total_targets=int(data.get("total_targets", 0)),
            stopped_early=bool(data.get("stopped_early", False)),
        )
