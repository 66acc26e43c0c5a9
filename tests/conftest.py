# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Ajoute la racine du projet au sys.path pour importer "breach_solver"
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from breach_solver.lib.s3_search import SolveRequest


def _make_request(rows, buffer_size, daemons, **kwargs) -> SolveRequest:
    """Construit une SolveRequest depuis une grille en lignes."""
    height = len(rows)
    width = len(rows[0])
    return SolveRequest(
        grid=[v for row in rows for v in row],
        width=width,
        height=height,
        buffer_size=buffer_size,
        daemon_sequences=[list(d) for d in daemons],
        **kwargs,
    )


@pytest.fixture
def make_request():
    return _make_request


@pytest.fixture
def two_daemon_rows():
    """Deux daemons disjoints, chacun complétable par un chemin de longueur 2."""
    return [
        [1, 3, 0],
        [2, 4, 0],
        [0, 0, 0],
    ]


@pytest.fixture
def staircase_rows():
    """Couloir en escalier : 3F puis 8E n'apparaissent qu'aux étapes 6 et 7."""
    return [
        [1, 0, 0, 0],
        [2, 3, 0, 0],
        [0, 4, 5, 0],
        [0, 0, 9, 10],
    ]


@pytest.fixture
def large_rows():
    """Grille 7x7 pleine, codes (r*7+c) % 10 + 1."""
    return [[(r * 7 + c) % 10 + 1 for c in range(7)] for r in range(7)]
