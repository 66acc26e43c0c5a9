"""Module s1_grid : Grille de codes et règles de déplacement."""

from .types import Axis, PathNode
from .grid import Grid

__all__ = [
    # Types
    "Axis",
    "PathNode",
    # Grille
    "Grid",
]
