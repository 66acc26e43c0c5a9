"""Module s0_symbols : Table des symboles (code -> symbole)."""

from .types import SymbolTable

DEFAULT_SYMBOL_TABLE = SymbolTable()

__all__ = [
    "SymbolTable",
    "DEFAULT_SYMBOL_TABLE",
]
