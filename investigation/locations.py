from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass(eq=False)
class Location:
    """A room in the mansion map. Each room owns at most two child rooms."""

    name: str
    clue: Optional[str] = None
    left: Optional["Location"] = None
    right: Optional["Location"] = None
    _owned: bool = field(default=False, repr=False)

    def has_left(self) -> bool:
        return self.left is not None

    def has_right(self) -> bool:
        return self.right is not None

    def left_of(self) -> "Location":
        if self.left is None:
            raise ValueError(f"no_path: '{self.name}' has no room to the left")
        return self.left

    def right_of(self) -> "Location":
        if self.right is None:
            raise ValueError(f"no_path: '{self.name}' has no room to the right")
        return self.right

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def build_location(name: str, clue: Optional[str] = None) -> Location:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("location name must be a non-empty string")
    if clue is not None and not isinstance(clue, str):
        raise ValueError(f"clue for '{name}' must be a string")
    return Location(name=name, clue=clue or None)


def _reachable(root: Location, target: Location) -> bool:
    return any(node is target for node in iter_locations(root))


def link(
    parent: Location,
    left: Optional[Location] = None,
    right: Optional[Location] = None,
) -> Location:
    """Attach children to ``parent`` while the map is being built."""
    for side, child in (("left", left), ("right", right)):
        if child is None:
            continue
        if getattr(parent, side) is not None:
            raise ValueError(f"slot_taken: '{parent.name}' already has a {side} room")
        if child._owned:
            raise ValueError(f"already_owned: '{child.name}' belongs to another room")
        if _reachable(child, parent):
            raise ValueError(f"cycle: '{child.name}' cannot contain '{parent.name}'")
        setattr(parent, side, child)
        child._owned = True
    return parent


def iter_locations(root: Optional[Location]) -> Iterator[Location]:
    """Pre-order walk, left before right."""
    stack: List[Location] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def count_locations(root: Optional[Location]) -> int:
    return sum(1 for _ in iter_locations(root))


def depth(root: Optional[Location]) -> int:
    if root is None:
        return 0
    deepest = 0
    stack = [(root, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        for child in (node.left, node.right):
            if child is not None:
                stack.append((child, level + 1))
    return deepest


def teardown(root: Optional[Location]) -> int:
    """Release the whole tree bottom-up. Returns the number of rooms released."""
    if root is None:
        return 0
    released = 0
    stack = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if not children_done:
            stack.append((node, True))
            for child in (node.right, node.left):
                if child is not None:
                    stack.append((child, False))
            continue
        node.left = None
        node.right = None
        node.clue = None
        node._owned = False
        released += 1
    return released
