"""Move token parsing and board orientation helpers."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple, Union

from .exceptions import InvalidMoveError

COLUMNS = "ABCDEFGH"
ROWS = "12345678"

# Black's four opening moves; all other first moves are illegal.
ROOT_MOVES: Tuple[str, ...] = ("C4", "D3", "E6", "F5")

_MOVE_RE = re.compile(r"^[A-H][1-8]$")

MovesInput = Union[str, Sequence[str]]


def normalize_move(token: str) -> str:
    """Return the upper-case form of a single move token, e.g. ``"c4" -> "C4"``."""
    move = token.strip().upper()
    if not _MOVE_RE.match(move):
        raise InvalidMoveError(token)
    return move


def split_moves(text: str) -> List[str]:
    """
    Split a concatenated move string such as ``"f5d6c3"`` into tokens.

    Whitespace between tokens is tolerated. A string that does not divide
    into two-character chunks is rejected instead of being cut short.
    """
    compact = "".join(text.split())
    if len(compact) % 2:
        raise InvalidMoveError(text, "move string has an odd number of characters")
    return [normalize_move(compact[i : i + 2]) for i in range(0, len(compact), 2)]


def parse_moves(value: MovesInput) -> List[str]:
    if isinstance(value, str):
        return split_moves(value)
    return [normalize_move(token) for token in value]


def number_moves(moves: Iterable[str]) -> List[str]:
    return [f"{index}. {move}" for index, move in enumerate(moves, start=1)]


def _identity(col: int, row: int) -> Tuple[int, int]:
    return col, row


def _transpose(col: int, row: int) -> Tuple[int, int]:
    return row, col


def _rotate(col: int, row: int) -> Tuple[int, int]:
    return 7 - col, 7 - row


def _anti_transpose(col: int, row: int) -> Tuple[int, int]:
    return 7 - row, 7 - col


# The symmetries of the starting position. Applied to F5 they give the
# four root moves: F5, E6, C4 and D3.
ORIENTATIONS = (_identity, _transpose, _rotate, _anti_transpose)


def orient_move(move: str, orientation: int) -> str:
    col, row = ORIENTATIONS[orientation](COLUMNS.index(move[0]), ROWS.index(move[1]))
    return f"{COLUMNS[col]}{ROWS[row]}"


def orient_moves(moves: Sequence[str], orientation: int) -> Tuple[str, ...]:
    return tuple(orient_move(move, orientation) for move in moves)
