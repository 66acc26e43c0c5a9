"""Détection des daemons complétés et heuristique de continuation."""

from typing import AbstractSet, FrozenSet, List, Optional, Sequence

from breach_solver.lib.s0_symbols import SymbolTable, DEFAULT_SYMBOL_TABLE


def _contains_run(symbols: Sequence[str], target: Sequence[str]) -> bool:
    """Vrai si target apparaît comme sous-séquence contiguë de symbols."""
    size = len(target)
    for start in range(len(symbols) - size + 1):
        if all(symbols[start + i] == target[i] for i in range(size)):
            return True
    return False


def _prefix_match_length(symbols: Sequence[str], start: int, target: Sequence[str]) -> int:
    """Nombre de symboles consécutifs de target alignés à partir de start."""
    matched = 0
    for i in range(min(len(target), len(symbols) - start)):
        if symbols[start + i] != target[i]:
            break
        matched += 1
    return matched


class CompletionMatcher:
    """Appariement chemin/daemons pour une table de symboles et une liste de cibles."""

    def __init__(
        self,
        targets: Sequence[Sequence[str]],
        symbols: Optional[SymbolTable] = None,
    ):
        self.targets: List[List[str]] = [list(t) for t in targets]
        self.symbols = symbols or DEFAULT_SYMBOL_TABLE

    def completed(self, path_values: Sequence[int]) -> FrozenSet[int]:
        """Indices des daemons dont la séquence complète apparaît dans le chemin."""
        mapped = self.symbols.map_values(path_values)
        return frozenset(
            index for index, target in enumerate(self.targets)
            if _contains_run(mapped, target)
        )

    def could_still_complete(
        self,
        path_values: Sequence[int],
        completed: AbstractSet[int],
    ) -> bool:
        """
        Vrai si un daemon non complété a un préfixe en cours en fin de chemin.

        Seules les fenêtres suffixes pouvant s'aligner sur le début du daemon
        sont examinées. Heuristique d'élagage : un daemon atteignable plus
        tard sans chevauchement de préfixe est considéré comme perdu.
        """
        mapped = self.symbols.map_values(path_values)
        length = len(mapped)
        for index, target in enumerate(self.targets):
            if index in completed:
                continue
            size = len(target)
            for start in range(max(0, length - size), length):
                matched = _prefix_match_length(mapped, start, target)
                if 0 < matched < size:
                    return True
        return False


# === API fonctionnelle ===

def completed(
    path_values: Sequence[int],
    targets: Sequence[Sequence[str]],
    symbols: Optional[SymbolTable] = None,
) -> FrozenSet[int]:
    """Indices des daemons complétés par le chemin (API fonctionnelle)."""
    return CompletionMatcher(targets, symbols).completed(path_values)


def could_still_complete(
    path_values: Sequence[int],
    completed_set: AbstractSet[int],
    targets: Sequence[Sequence[str]],
    symbols: Optional[SymbolTable] = None,
) -> bool:
    """Heuristique de continuation (API fonctionnelle)."""
    return CompletionMatcher(targets, symbols).could_still_complete(path_values, completed_set)
