"""Compile a flat opening catalogue into a forest of prefix trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import CatalogueError, InvalidMoveError
from .moves import ORIENTATIONS, ROOT_MOVES, normalize_move, orient_moves, split_moves

logger = logging.getLogger(__name__)

BUNDLED_CATALOGUE = Path(__file__).resolve().parent / "data" / "openings.txt"


@dataclass(frozen=True)
class CatalogueEntry:
    moves: Tuple[str, ...]
    name: str


@dataclass(frozen=True)
class OpeningNode:
    """One trie node: the position reached after playing ``path``'s prefix ending in ``move``."""

    move: str
    children: Mapping[str, "OpeningNode"] = field(default_factory=lambda: MappingProxyType({}))
    name: Optional[str] = None
    path: Tuple[str, ...] = ()

    def child(self, move: str) -> Optional["OpeningNode"]:
        return self.children.get(move)

    def walk(self) -> Iterator["OpeningNode"]:
        yield self
        for child in self.children.values():
            yield from child.walk()


@dataclass(frozen=True)
class OpeningForest:
    roots: Mapping[str, OpeningNode]

    def root(self, move: str) -> Optional[OpeningNode]:
        return self.roots.get(move)

    def openings(self, root: Optional[str] = None) -> List[OpeningNode]:
        """Return every named node, optionally restricted to one root. Unknown roots have none."""
        if root is None:
            selected = [self.roots[move] for move in ROOT_MOVES]
        else:
            selected = [self.roots[root]] if root in self.roots else []
        return [node for tree in selected for node in tree.walk() if node.name is not None]

    def node_count(self, root: str) -> int:
        tree = self.roots.get(root)
        if tree is None:
            return 0
        return sum(1 for _ in tree.walk())

    def __len__(self) -> int:
        return len(self.openings())


class _NodeBuilder:
    def __init__(self, move: str) -> None:
        self.move = move
        self.children: Dict[str, _NodeBuilder] = {}
        self.name: Optional[str] = None
        self.path: Tuple[str, ...] = ()

    def freeze(self) -> OpeningNode:
        children = {move: child.freeze() for move, child in self.children.items()}
        return OpeningNode(
            move=self.move,
            children=MappingProxyType(children),
            name=self.name,
            path=self.path,
        )


def parse_entry(line: str, index: int = 0) -> CatalogueEntry:
    """Parse one ``<moves>:<name>`` line, splitting on the first colon."""
    raw_moves, sep, name = line.partition(":")
    if not sep:
        raise CatalogueError(index, line, "missing ':' separator")
    name = name.strip()
    if not name:
        raise CatalogueError(index, line, "opening name is empty")
    if not raw_moves.strip():
        raise CatalogueError(index, line, "move sequence is empty")
    try:
        moves = split_moves(raw_moves)
    except InvalidMoveError as exc:
        raise CatalogueError(index, line, str(exc)) from exc
    return _checked_entry(moves, name, index, line)


def parse_pair(moves: Sequence[str], name: str, index: int = 0) -> CatalogueEntry:
    """
    Validate a ``(moves, name)`` pair token by token.

    Each element of ``moves`` must be exactly one move; a concatenated
    string such as ``"C4D3"`` is not split here.
    """
    raw = repr((moves, name))
    if not isinstance(moves, (list, tuple)):
        raise CatalogueError(index, raw, "moves must be a sequence of move tokens")
    if not isinstance(name, str) or not name.strip():
        raise CatalogueError(index, raw, "opening name is empty")
    if not moves:
        raise CatalogueError(index, raw, "move sequence is empty")
    normalized = []
    for token in moves:
        if not isinstance(token, str):
            raise CatalogueError(index, raw, f"move {token!r} is not a string")
        try:
            normalized.append(normalize_move(token))
        except InvalidMoveError as exc:
            raise CatalogueError(index, raw, str(exc)) from exc
    return _checked_entry(normalized, name.strip(), index, raw)


def _checked_entry(moves: Sequence[str], name: str, index: int, raw: str) -> CatalogueEntry:
    if moves[0] not in ROOT_MOVES:
        raise CatalogueError(index, raw, f"first move {moves[0]} is not one of {', '.join(ROOT_MOVES)}")
    return CatalogueEntry(moves=tuple(moves), name=name)


RawEntry = Union[str, CatalogueEntry, Tuple[Sequence[str], str]]


def _parse_raw(item: RawEntry, index: int) -> CatalogueEntry:
    if isinstance(item, str):
        return parse_entry(item, index)
    if isinstance(item, CatalogueEntry):
        return parse_pair(item.moves, item.name, index)
    if isinstance(item, tuple) and len(item) == 2:
        return parse_pair(item[0], item[1], index)
    raise CatalogueError(index, repr(item), "expected a 'moves:name' line, a CatalogueEntry or a (moves, name) pair")


def parse_catalogue(lines: Iterable[RawEntry], strict: bool = True) -> List[CatalogueEntry]:
    """Parse lines, entries or ``(moves, name)`` pairs into validated entries."""
    entries: List[CatalogueEntry] = []
    for index, line in enumerate(lines):
        try:
            entries.append(_parse_raw(line, index))
        except CatalogueError as exc:
            if strict:
                raise
            logger.warning(f"Skipping catalogue entry: {exc}")
    return entries


def read_catalogue_lines(path: Union[str, Path]) -> List[str]:
    """Read catalogue lines from a text file, dropping blanks and ``#`` comments."""
    text = Path(path).read_text(encoding="utf-8")
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


def expand_symmetries(entries: Iterable[CatalogueEntry]) -> List[CatalogueEntry]:
    """Add the other three board orientations of every entry, keeping the given ones first."""
    expanded: List[CatalogueEntry] = []
    seen = set()
    for entry in entries:
        for orientation in range(len(ORIENTATIONS)):
            moves = orient_moves(entry.moves, orientation)
            if orientation and moves in seen:
                continue
            seen.add(moves)
            expanded.append(CatalogueEntry(moves=moves, name=entry.name))
    return expanded


def compile_catalogue(
    entries: Iterable[RawEntry],
    strict: bool = True,
) -> OpeningForest:
    """
    Build the opening forest, one trie per root move.

    Entries are validated first. With ``strict`` a single bad entry rejects
    the whole catalogue with :class:`CatalogueError`; otherwise bad entries
    are logged and skipped. When the same full sequence appears twice the
    later name wins.
    """
    parsed = parse_catalogue(entries, strict=strict)
    builders = {move: _NodeBuilder(move) for move in ROOT_MOVES}

    for entry in parsed:
        node = builders[entry.moves[0]]
        for move in entry.moves[1:]:
            child = node.children.get(move)
            if child is None:
                child = _NodeBuilder(move)
                node.children[move] = child
            node = child
        if node.name is not None and node.name != entry.name:
            logger.warning(f"Opening {' '.join(entry.moves)} renamed from {node.name!r} to {entry.name!r}")
        node.name = entry.name
        node.path = entry.moves

    forest = OpeningForest(roots=MappingProxyType({move: builder.freeze() for move, builder in builders.items()}))
    logger.info(f"Compiled {len(forest)} openings from {len(parsed)} catalogue entries")
    return forest


def load_forest(
    path: Union[str, Path, None] = None,
    strict: bool = True,
    symmetric: bool = False,
) -> OpeningForest:
    lines = read_catalogue_lines(path or BUNDLED_CATALOGUE)
    entries = parse_catalogue(lines, strict=strict)
    if symmetric:
        entries = expand_symmetries(entries)
    return compile_catalogue(entries, strict=strict)
