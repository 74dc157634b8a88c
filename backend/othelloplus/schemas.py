"""Pydantic schemas for the Othello Plus API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .moves import number_moves, parse_moves
from .openings import OpeningMatch


class MovesPayload(BaseModel):
    """Moves as a list of tokens or a single concatenated string like ``"f5d6c3"``."""

    moves: list[str] = Field(default_factory=list)

    @field_validator("moves", mode="before")
    @classmethod
    def split_move_string(cls, value: Union[str, list[str], None]) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return parse_moves(value)
        if not isinstance(value, (list, tuple)) or not all(isinstance(token, str) for token in value):
            raise ValueError("moves must be a string or a list of strings")
        return parse_moves(value)


class ClassifyRequest(MovesPayload):
    pass


class WatchCreateRequest(MovesPayload):
    pass


class MovesUpdateRequest(MovesPayload):
    pass


class OpeningInfo(BaseModel):
    name: str
    path: list[str]
    ply: int
    label: str

    @classmethod
    def from_match(cls, match: Optional[OpeningMatch]) -> Optional["OpeningInfo"]:
        if match is None:
            return None
        return cls(name=match.name, path=list(match.path), ply=match.ply, label=match.label())


class ClassifyResponse(BaseModel):
    moves: list[str]
    numbered_moves: list[str]
    opening: OpeningInfo | None = None

    @classmethod
    def build(cls, moves: list[str], match: Optional[OpeningMatch]) -> "ClassifyResponse":
        return cls(moves=moves, numbered_moves=number_moves(moves), opening=OpeningInfo.from_match(match))


class CatalogueOpening(BaseModel):
    name: str
    path: list[str]


class RootSummary(BaseModel):
    move: str
    nodes: int
    openings: int


class CatalogueSummary(BaseModel):
    roots: list[RootSummary]
    total_openings: int


class WatchResponse(ClassifyResponse):
    watch_id: str
    created_at: datetime
    updated_at: datetime
