"""Service de requête : construction, chargement et validation des puzzles."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from breach_solver.config import SOLVER_CONFIG, SYMBOL_CODES
from breach_solver.lib.s0_symbols import SymbolTable
from breach_solver.lib.s3_search import SolveRequest


class SolveRequestError(ValueError):
    """Requête de résolution invalide."""


def _normalize_daemons(
    daemons: Sequence[Sequence[Union[str, int]]],
    symbols: SymbolTable,
) -> List[List[str]]:
    """Convertit les daemons (symboles ou codes) en séquences de symboles, sans les vides."""
    sequences = []
    for daemon in daemons:
        codes = [isinstance(item, int) and not isinstance(item, bool) for item in daemon]
        if any(codes) and not all(codes):
            raise SolveRequestError(f"Daemon mélangeant codes et symboles: {list(daemon)}")
        if daemon and all(codes):
            sequence = symbols.sequence_from_codes(daemon)
        else:
            sequence = [str(item) for item in daemon] or None
        if sequence:
            sequences.append(sequence)
    return sequences


def _to_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SolveRequestError(f"Valeur entière attendue pour {field_name}: {value!r}") from e


def build_request(data: Dict[str, Any], **overrides: Any) -> SolveRequest:
    """
    Construit une SolveRequest depuis un dictionnaire de puzzle.

    La grille peut être une liste de lignes (dimensions déduites) ou une
    liste plate accompagnée de "width"/"height". Les daemons peuvent être
    donnés en symboles ("1C") ou en codes (1..N). Les paramètres de
    recherche absents reprennent SOLVER_CONFIG ; `overrides` (valeurs non
    None) priment sur le fichier.
    """
    if "grid" not in data or "buffer_size" not in data:
        raise SolveRequestError("Le puzzle doit définir 'grid' et 'buffer_size'")

    symbol_table = list(data.get("symbols") or SYMBOL_CODES)
    symbols = SymbolTable(tuple(symbol_table))

    grid = data["grid"]
    if not isinstance(grid, (list, tuple)):
        raise SolveRequestError("'grid' doit être une liste de lignes ou une liste plate")
    if grid and isinstance(grid[0], (list, tuple)):
        height = len(grid)
        width = len(grid[0])
        if any(not isinstance(row, (list, tuple)) or len(row) != width for row in grid):
            raise SolveRequestError("Toutes les lignes de la grille doivent avoir la même longueur")
        flat = [_to_int(v, "grid") for row in grid for v in row]
    else:
        flat = [_to_int(v, "grid") for v in grid]
        width = _to_int(data.get("width", 0), "width")
        height = _to_int(data.get("height", 0), "height")

    params = {key: data.get(key, default) for key, default in SOLVER_CONFIG.items()}
    params.update({key: value for key, value in overrides.items() if value is not None})

    return SolveRequest(
        grid=flat,
        width=width,
        height=height,
        buffer_size=_to_int(data["buffer_size"], "buffer_size"),
        daemon_sequences=_normalize_daemons(data.get("daemons", []), symbols),
        symbol_table=symbol_table,
        **params,
    )


def load_request(path: Union[str, Path], **overrides: Any) -> SolveRequest:
    """Charge un puzzle JSON et construit la requête."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SolveRequestError(f"Fichier puzzle invalide ({path}): {e}") from e
    return build_request(data, **overrides)


def validate_request(request: SolveRequest) -> None:
    """Vérifie une requête avant de lancer la recherche (SolveRequestError sinon)."""
    if request.width < 1 or request.height < 1:
        raise SolveRequestError(f"Dimensions de grille invalides: {request.width}x{request.height}")
    if len(request.grid) != request.width * request.height:
        raise SolveRequestError(
            f"La grille contient {len(request.grid)} cases, "
            f"{request.width * request.height} attendues"
        )
    if request.buffer_size < 1:
        raise SolveRequestError(f"Taille de buffer invalide: {request.buffer_size}")
    if not request.daemon_sequences or not any(request.daemon_sequences):
        raise SolveRequestError("Veuillez renseigner au moins une séquence de daemon")
    if any(len(d) == 0 for d in request.daemon_sequences):
        raise SolveRequestError("Les séquences de daemon ne peuvent pas être vides")

    max_code = len(request.symbol_table)
    invalid = sorted({v for v in request.grid if not 0 <= v <= max_code})
    if invalid:
        raise SolveRequestError(f"Codes hors alphabet (1..{max_code}) dans la grille: {invalid}")

    if request.max_iterations < 1:
        raise SolveRequestError(f"max_iterations doit être >= 1 (reçu {request.max_iterations})")
    if request.max_solutions < 1:
        raise SolveRequestError(f"max_solutions doit être >= 1 (reçu {request.max_solutions})")


def describe_request(request: SolveRequest) -> Dict[str, Any]:
    """Résumé court d'une requête (logs et affichage)."""
    return {
        "grid_size": f"{request.width}x{request.height}",
        "buffer_size": request.buffer_size,
        "daemons": [",".join(d) for d in request.daemon_sequences],
        "empty_cells": sum(1 for v in request.grid if v == 0),
        "alphabet": len(request.symbol_table),
        "max_iterations": request.max_iterations,
    }
