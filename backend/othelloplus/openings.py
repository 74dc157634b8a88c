"""Opening recognition by walking the compiled opening tries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .catalogue import OpeningForest, OpeningNode


@dataclass(frozen=True)
class OpeningMatch:
    name: str
    path: Tuple[str, ...]

    @property
    def ply(self) -> int:
        return len(self.path)

    def label(self) -> str:
        return f"Opening: {self.name} ({' '.join(self.path)})"

    @classmethod
    def from_node(cls, node: OpeningNode) -> "OpeningMatch":
        return cls(name=node.name or "", path=node.path)


def detect_opening(forest: OpeningForest, moves: Sequence[str]) -> Optional[OpeningMatch]:
    """
    Return the deepest catalogued opening that ``moves`` starts with.

    Every node reached is checked for a name, including the root and the
    node of the last played move. The walk stops at the first move with no
    catalogued continuation; moves after that never change the result.
    Returns ``None`` when nothing matches.
    """
    if not moves:
        return None
    node = forest.root(moves[0])
    if node is None:
        return None

    best: Optional[OpeningNode] = None
    for move in moves[1:]:
        if node.name is not None:
            best = node
        node = node.child(move)
        if node is None:
            break
    else:
        if node.name is not None:
            best = node

    return OpeningMatch.from_node(best) if best is not None else None
