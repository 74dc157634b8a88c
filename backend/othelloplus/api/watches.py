"""Watched game endpoints: push the live move list, receive opening updates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import Response

from ..catalogue import OpeningForest
from ..realtime import stream_manager
from ..schemas import MovesUpdateRequest, WatchCreateRequest, WatchResponse
from ..store import WatchRecord, store
from .deps import get_forest

router = APIRouter(prefix="/watches", tags=["watches"])


def opening_message(record: WatchRecord) -> dict:
    return {"type": "opening", "payload": record.to_response().model_dump(mode="json")}


@router.post("", response_model=WatchResponse, status_code=201)
def create_watch(payload: WatchCreateRequest, forest: OpeningForest = Depends(get_forest)) -> WatchResponse:
    record = store.create_watch(forest, payload.moves)
    return record.to_response()


@router.get("/{watch_id}", response_model=WatchResponse)
def get_watch(watch_id: str = Path(..., description="Watch identifier")) -> WatchResponse:
    try:
        record = store.get_watch(watch_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Watch not found") from None
    return record.to_response()


@router.put("/{watch_id}/moves", response_model=WatchResponse)
async def update_moves(
    payload: MovesUpdateRequest,
    watch_id: str = Path(..., description="Watch identifier"),
    forest: OpeningForest = Depends(get_forest),
) -> WatchResponse:
    try:
        record = store.update_moves(forest, watch_id, payload.moves)
    except KeyError:
        raise HTTPException(status_code=404, detail="Watch not found") from None
    await stream_manager.broadcast(watch_id, opening_message(record))
    return record.to_response()


@router.delete("/{watch_id}", status_code=204)
def delete_watch(watch_id: str = Path(..., description="Watch identifier")) -> Response:
    try:
        store.delete_watch(watch_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Watch not found") from None
    return Response(status_code=204)
