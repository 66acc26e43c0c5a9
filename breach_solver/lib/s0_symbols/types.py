"""Types pour le module s0_symbols."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from breach_solver.config import SYMBOL_CODES


@dataclass(frozen=True)
class SymbolTable:
    """Table ordonnée code (1-based) -> symbole affiché."""
    symbols: Tuple[str, ...] = tuple(SYMBOL_CODES)

    def __post_init__(self):
        # Accepte une liste en entrée, stocke un tuple (hashable, picklable)
        object.__setattr__(self, "symbols", tuple(self.symbols))

    def __len__(self) -> int:
        return len(self.symbols)

    def is_valid_code(self, code: int) -> bool:
        return 1 <= code <= len(self.symbols)

    def symbol_for(self, code: int) -> Optional[str]:
        """Retourne le symbole d'un code, None hors alphabet."""
        code = int(code)
        if not self.is_valid_code(code):
            return None
        return self.symbols[code - 1]

    def code_for(self, symbol: str) -> int:
        """Retourne le code 1-based d'un symbole (ValueError si inconnu)."""
        try:
            return self.symbols.index(symbol) + 1
        except ValueError:
            raise ValueError(f"Symbole inconnu: {symbol!r}") from None

    def map_values(self, values: Iterable[int]) -> List[str]:
        """Convertit des codes en symboles, en ignorant les codes hors alphabet."""
        mapped = []
        for value in values:
            symbol = self.symbol_for(value)
            if symbol is not None:
                mapped.append(symbol)
        return mapped

    def sequence_from_codes(self, codes: Sequence[int]) -> Optional[List[str]]:
        """
        Construit une séquence de daemon à partir de cases saisies.

        Les cases vides (0) et les codes invalides sont ignorés ;
        retourne None si aucune case n'est remplie.
        """
        sequence = self.map_values(c for c in codes if c)
        return sequence if sequence else None
