"""Shared request dependencies."""

from __future__ import annotations

from starlette.requests import HTTPConnection

from ..catalogue import OpeningForest


def get_forest(connection: HTTPConnection) -> OpeningForest:
    """Return the forest compiled at startup and held on the application state."""
    return connection.app.state.forest
