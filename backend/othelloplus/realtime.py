"""Lightweight WebSocket connection manager for watch streams."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WatchStreamManager:
    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, watch_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[watch_id].add(websocket)

    def disconnect(self, watch_id: str, websocket: WebSocket) -> None:
        if websocket in self._connections.get(watch_id, set()):
            self._connections[watch_id].remove(websocket)
        if not self._connections.get(watch_id):
            self._connections.pop(watch_id, None)

    def subscribers(self, watch_id: str) -> int:
        return len(self._connections.get(watch_id, set()))

    async def broadcast(self, watch_id: str, message: dict) -> None:
        dead: list[WebSocket] = []
        for websocket in self._connections.get(watch_id, set()).copy():
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.warning(f"Dropping subscriber of watch {watch_id}: {exc}")
                dead.append(websocket)
        for websocket in dead:
            self.disconnect(watch_id, websocket)


stream_manager = WatchStreamManager()
