"""Types pour le module s3_search."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Tuple

from breach_solver.config import SOLVER_CONFIG, SYMBOL_CODES
from breach_solver.lib.s0_symbols import SymbolTable
from breach_solver.lib.s1_grid import Axis, PathNode


@dataclass
class SolveRequest:
    """Entrée complète d'une résolution."""
    grid: List[int]                      # Liste plate row-major, 0 = vide
    width: int
    height: int
    buffer_size: int
    daemon_sequences: List[List[str]]
    symbol_table: List[str] = field(default_factory=lambda: list(SYMBOL_CODES))
    max_iterations: int = SOLVER_CONFIG["max_iterations"]
    reorder_interval: int = SOLVER_CONFIG["reorder_interval"]
    max_solutions: int = SOLVER_CONFIG["max_solutions"]
    progress_interval: int = SOLVER_CONFIG["progress_interval"]
    stop_on_full_completion: bool = SOLVER_CONFIG["stop_on_full_completion"]
    prune_dead_branches: bool = SOLVER_CONFIG["prune_dead_branches"]

    @property
    def symbols(self) -> SymbolTable:
        return SymbolTable(tuple(self.symbol_table))

    @property
    def total_targets(self) -> int:
        return len(self.daemon_sequences)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": list(self.grid),
            "width": self.width,
            "height": self.height,
            "buffer_size": self.buffer_size,
            "daemon_sequences": [list(d) for d in self.daemon_sequences],
            "symbol_table": list(self.symbol_table),
            "max_iterations": self.max_iterations,
            "reorder_interval": self.reorder_interval,
            "max_solutions": self.max_solutions,
            "progress_interval": self.progress_interval,
            "stop_on_full_completion": self.stop_on_full_completion,
            "prune_dead_branches": self.prune_dead_branches,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolveRequest":
        return cls(**data)


@dataclass(frozen=True)
class StateKey:
    """Clé canonique d'un état : position, axe et cases visitées (triées)."""
    row: int
    col: int
    axis: Axis
    cells: Tuple[int, ...]


@dataclass(frozen=True)
class VisitedEntry:
    """Meilleur résultat connu pour une clé d'état."""
    count: int
    length: int

    def dominates(self, count: int, length: int) -> bool:
        return self.count >= count and self.length <= length


@dataclass(frozen=True)
class TraversalState:
    """État exploré : position, contrainte d'axe, chemin et budget restant."""
    row: int
    col: int
    axis: Axis
    path: Tuple[PathNode, ...]
    visited: FrozenSet[Tuple[int, int]]
    remaining_moves: int
    completed: FrozenSet[int] = frozenset()

    @classmethod
    def start(cls, node: PathNode, buffer_size: int, completed: FrozenSet[int]) -> "TraversalState":
        """État initial sur une case de la ligne 0 ; premier déplacement en colonne."""
        return cls(
            row=node.row,
            col=node.col,
            axis=Axis.COLUMN,
            path=(node,),
            visited=frozenset([node.cell]),
            remaining_moves=buffer_size - 1,
            completed=completed,
        )

    @property
    def length(self) -> int:
        return len(self.path)

    @property
    def values(self) -> List[int]:
        return [node.value for node in self.path]

    def extend(self, node: PathNode, completed: FrozenSet[int]) -> "TraversalState":
        """Nouvel état après un déplacement ; l'axe bascule."""
        return TraversalState(
            row=node.row,
            col=node.col,
            axis=self.axis.flipped(),
            path=self.path + (node,),
            visited=self.visited | {node.cell},
            remaining_moves=self.remaining_moves - 1,
            completed=completed,
        )

    def key(self, width: int) -> StateKey:
        cells = tuple(sorted(row * width + col for row, col in self.visited))
        return StateKey(self.row, self.col, self.axis, cells)
