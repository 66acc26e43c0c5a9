"""Types pour le module s1_grid."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Axis(Enum):
    """Contrainte d'axe pour le prochain déplacement."""
    COLUMN = "column"  # Colonne fixe : on change de ligne
    ROW = "row"        # Ligne fixe : on change de colonne

    def flipped(self) -> "Axis":
        return Axis.ROW if self is Axis.COLUMN else Axis.COLUMN


@dataclass(frozen=True)
class PathNode:
    """Étape d'un chemin (row, col, valeur)."""
    row: int
    col: int
    value: int

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.row, self.col, self.value)
