"""WebSocket streaming endpoints."""

from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..config import settings
from ..realtime import stream_manager
from ..store import store
from .watches import opening_message

router = APIRouter()


@router.websocket(f"{settings.api_prefix}/watches/{{watch_id}}/stream")
async def watch_stream(websocket: WebSocket, watch_id: str) -> None:
    try:
        record = store.get_watch(watch_id)
    except KeyError:
        await websocket.close(code=4404)
        return

    await stream_manager.connect(watch_id, websocket)
    try:
        await websocket.send_json(opening_message(record))
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        stream_manager.disconnect(watch_id, websocket)
