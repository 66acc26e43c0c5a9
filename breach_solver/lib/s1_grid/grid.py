"""Grille immuable (numpy) et génération des déplacements candidats."""

from typing import AbstractSet, List, Sequence, Tuple

import numpy as np

from .types import Axis, PathNode


class Grid:
    """Matrice de codes, indexée (row, col) en row-major. 0 = case vide."""

    def __init__(self, cells: np.ndarray):
        cells = np.array(cells, dtype=np.int64, copy=True)
        if cells.ndim != 2:
            raise ValueError(f"Grille 2D attendue, reçu ndim={cells.ndim}")
        cells.flags.writeable = False
        self.cells = cells

    @classmethod
    def from_flat(cls, values: Sequence[int], width: int, height: int) -> "Grid":
        """
        Construit la grille depuis une liste plate row-major.

        Une liste trop courte est complétée par des cases vides,
        les valeurs en trop sont ignorées.
        """
        size = width * height
        flat = np.zeros(size, dtype=np.int64)
        count = min(len(values), size)
        if count:
            flat[:count] = np.asarray(values[:count], dtype=np.int64)
        return cls(flat.reshape(height, width))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        return cls(np.asarray(rows, dtype=np.int64))

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    def value(self, row: int, col: int) -> int:
        return int(self.cells[row, col])

    def cell_index(self, row: int, col: int) -> int:
        return row * self.width + col

    def to_flat(self) -> List[int]:
        return [int(v) for v in self.cells.ravel()]

    def start_nodes(self) -> List[PathNode]:
        """Cases non vides de la ligne 0, de gauche à droite."""
        return [
            PathNode(row=0, col=int(col), value=int(self.cells[0, col]))
            for col in np.flatnonzero(self.cells[0])
        ]

    def candidates(
        self,
        row: int,
        col: int,
        axis: Axis,
        visited: AbstractSet[Tuple[int, int]],
    ) -> List[PathNode]:
        """
        Déplacements possibles depuis (row, col) selon la contrainte d'axe.

        COLUMN : même colonne, autres lignes. ROW : même ligne, autres colonnes.
        Les cases vides et déjà visitées sont exclues ; ordre croissant d'index.
        """
        moves = []
        if axis is Axis.COLUMN:
            for new_row in np.flatnonzero(self.cells[:, col]):
                new_row = int(new_row)
                if new_row != row and (new_row, col) not in visited:
                    moves.append(PathNode(new_row, col, int(self.cells[new_row, col])))
        else:
            for new_col in np.flatnonzero(self.cells[row]):
                new_col = int(new_col)
                if new_col != col and (row, new_col) not in visited:
                    moves.append(PathNode(row, new_col, int(self.cells[row, new_col])))
        return moves
