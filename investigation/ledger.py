from __future__ import annotations

from typing import Iterator, List, Optional


class _ClueNode:
    __slots__ = ("clue", "left", "right")

    def __init__(self, clue: str) -> None:
        self.clue = clue
        self.left: Optional[_ClueNode] = None
        self.right: Optional[_ClueNode] = None


class ClueLedger:
    """Collected clues kept in a binary search tree, one record per distinct text.

    Ordering is plain ``str`` comparison. Code point order matches byte-wise
    order of the UTF-8 encoding, so this is the byte-wise lexical order.
    The tree is never rebalanced: clues arriving already sorted degrade it to
    a list.
    """

    def __init__(self) -> None:
        self._root: Optional[_ClueNode] = None
        self._size = 0

    def add(self, clue: str) -> bool:
        """Insert ``clue``; return True when it was not collected before."""
        if not clue:
            return False
        if self._root is None:
            self._root = _ClueNode(clue)
            self._size = 1
            return True
        node = self._root
        while True:
            if clue == node.clue:
                return False
            if clue < node.clue:
                if node.left is None:
                    node.left = _ClueNode(clue)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _ClueNode(clue)
                    break
                node = node.right
        self._size += 1
        return True

    def insert(self, clue: str) -> "ClueLedger":
        self.add(clue)
        return self

    def __iter__(self) -> Iterator[str]:
        stack: List[_ClueNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.clue
            node = node.right

    def enumerate_in_order(self) -> List[str]:
        return list(self)

    def __contains__(self, clue: object) -> bool:
        if not isinstance(clue, str):
            return False
        node = self._root
        while node is not None:
            if clue == node.clue:
                return True
            node = node.left if clue < node.clue else node.right
        return False

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def clear(self) -> int:
        """Tear the tree down leaves first and return how many records were dropped."""
        released = 0
        stack = [(self._root, False)] if self._root is not None else []
        while stack:
            node, children_done = stack.pop()
            if not children_done:
                stack.append((node, True))
                for child in (node.right, node.left):
                    if child is not None:
                        stack.append((child, False))
                continue
            node.left = node.right = None
            released += 1
        self._root = None
        self._size = 0
        return released

    def __repr__(self) -> str:
        return f"ClueLedger({self.enumerate_in_order()!r})"
