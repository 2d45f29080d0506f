from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from investigation.locations import Location, build_location, link
from investigation.suspects import SuspectIndex


def _parse_bindings(raw: Any) -> List[Tuple[str, str]]:
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [(str(clue), str(suspect)) for clue, suspect in raw.items()]
    if not isinstance(raw, list):
        raise ValueError("bindings must be a list of {clue, suspect} objects or a mapping")
    pairs = []
    for item in raw:
        if not isinstance(item, Mapping) or "clue" not in item or "suspect" not in item:
            raise ValueError(f"invalid binding entry: {item!r}")
        pairs.append((str(item["clue"]), str(item["suspect"])))
    return pairs


def _check_rooms(rooms: Mapping[str, Any]) -> None:
    seen: Set[str] = set()
    stack: List[Any] = [rooms]
    while stack:
        room = stack.pop()
        if not isinstance(room, Mapping):
            raise ValueError(f"room entries must be objects, got {room!r}")
        name = room.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("every room needs a non-empty name")
        if name in seen:
            raise ValueError(f"duplicate room name: {name}")
        seen.add(name)
        clue = room.get("clue")
        if clue is not None and not isinstance(clue, str):
            raise ValueError(f"clue in room '{name}' must be a string")
        for side in ("left", "right"):
            if room.get(side) is not None:
                stack.append(room[side])


@dataclass(frozen=True)
class CaseFile:
    name: str
    rooms: Dict[str, Any]
    bindings: List[Tuple[str, str]] = field(default_factory=list)
    intro: str = ""

    @staticmethod
    def from_dict(raw: Mapping[str, Any], default_name: str = "case") -> "CaseFile":
        rooms = raw.get("rooms")
        if not isinstance(rooms, Mapping):
            raise ValueError("case file needs a 'rooms' object describing the entrance room")
        _check_rooms(rooms)
        bindings = _parse_bindings(raw.get("bindings"))
        # Same checks the index applies when the game starts.
        SuspectIndex.from_pairs(bindings)
        return CaseFile(
            name=str(raw.get("name", default_name)),
            rooms=dict(rooms),
            bindings=bindings,
            intro=str(raw.get("intro", "")),
        )

    @staticmethod
    def load(path: Path) -> "CaseFile":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, Mapping):
            raise ValueError(f"case file {path} must contain a JSON object")
        return CaseFile.from_dict(raw, default_name=path.stem)

    def build_map(self) -> Location:
        root = build_location(self.rooms["name"], self.rooms.get("clue"))
        pending: List[Tuple[Location, Mapping[str, Any]]] = [(root, self.rooms)]
        while pending:
            node, spec = pending.pop()
            children: Dict[str, Optional[Location]] = {}
            for side in ("left", "right"):
                child_spec = spec.get(side)
                if child_spec is None:
                    continue
                child = build_location(child_spec["name"], child_spec.get("clue"))
                children[side] = child
                pending.append((child, child_spec))
            link(node, left=children.get("left"), right=children.get("right"))
        return root

    def build_index(self) -> SuspectIndex:
        return SuspectIndex.from_pairs(self.bindings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "intro": self.intro,
            "rooms": self.rooms,
            "bindings": [{"clue": clue, "suspect": suspect} for clue, suspect in self.bindings],
        }
