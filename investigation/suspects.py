from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


class SuspectIndex:
    """Clue -> suspect bindings. Re-binding a clue replaces its suspect."""

    def __init__(self) -> None:
        self._bindings: Dict[str, str] = {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "SuspectIndex":
        index = cls()
        for clue, suspect in pairs:
            index.put(clue, suspect)
        return index

    def put(self, clue: str, suspect: str) -> None:
        if not isinstance(clue, str) or not clue.strip():
            raise ValueError("clue must be a non-empty string")
        if not isinstance(suspect, str) or not suspect.strip():
            raise ValueError(f"suspect for clue '{clue}' must be a non-empty string")
        self._bindings[clue] = suspect

    def get(self, clue: str) -> Optional[str]:
        return self._bindings.get(clue)

    def distinct_suspects(self) -> FrozenSet[str]:
        return frozenset(self._bindings.values())

    def has_suspects(self) -> bool:
        return bool(self._bindings)

    def clues_for(self, suspect: str) -> List[str]:
        wanted = suspect.strip().casefold()
        return sorted(clue for clue, name in self._bindings.items() if name.casefold() == wanted)

    def __contains__(self, clue: object) -> bool:
        return clue in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"SuspectIndex({self._bindings!r})"
