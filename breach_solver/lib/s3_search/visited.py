"""Table des états visités (élagage des états dominés)."""

from typing import Dict, Optional

from .types import StateKey, VisitedEntry


class VisitedStateTable:
    """Clé d'état -> meilleur (nombre de daemons, longueur) observé."""

    def __init__(self):
        self._entries: Dict[StateKey, VisitedEntry] = {}
        self.dominated_count = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: StateKey) -> Optional[VisitedEntry]:
        return self._entries.get(key)

    def check_and_record(self, key: StateKey, count: int, length: int) -> bool:
        """
        Retourne False si l'état est dominé par une entrée existante.
        Sinon enregistre (count, length) pour la clé et retourne True.
        """
        previous = self._entries.get(key)
        if previous is not None and previous.dominates(count, length):
            self.dominated_count += 1
            return False
        self._entries[key] = VisitedEntry(count=count, length=length)
        return True

    def clear(self) -> None:
        self._entries.clear()
        self.dominated_count = 0
