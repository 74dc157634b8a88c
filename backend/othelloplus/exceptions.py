"""Exception types raised by the opening engine."""

from __future__ import annotations


class OthelloPlusError(Exception):
    """Base exception for all Othello Plus errors."""


class InvalidMoveError(OthelloPlusError, ValueError):
    """Raised when a move token or move string cannot be parsed."""

    def __init__(self, value: str, reason: str = "expected a column A-H followed by a row 1-8") -> None:
        self.value = value
        super().__init__(f"Invalid move {value!r}: {reason}")


class CatalogueError(OthelloPlusError, ValueError):
    """Raised when an opening catalogue entry is malformed."""

    def __init__(self, index: int, entry: str, reason: str) -> None:
        self.index = index
        self.entry = entry
        self.reason = reason
        super().__init__(f"Catalogue entry {index} ({entry!r}): {reason}")


__all__ = ["CatalogueError", "InvalidMoveError", "OthelloPlusError"]
