"""In-memory repository of watched games."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from .catalogue import OpeningForest
from .config import settings
from .openings import OpeningMatch, detect_opening
from .schemas import ClassifyResponse, WatchResponse


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WatchRecord:
    watch_id: str
    created_at: datetime
    updated_at: datetime
    moves: List[str] = field(default_factory=list)
    opening: Optional[OpeningMatch] = None
    expires_at: float = 0.0

    def to_response(self) -> WatchResponse:
        classified = ClassifyResponse.build(self.moves, self.opening)
        return WatchResponse(
            watch_id=self.watch_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            **classified.model_dump(),
        )


class WatchStore:
    """
    Live move lists keyed by watch id.

    Each update re-runs opening detection against the forest passed in, so
    a record's ``opening`` always reflects its current ``moves``. Records
    idle for longer than ``ttl_seconds`` are dropped on access.
    """

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl = ttl_seconds
        self._records: Dict[str, WatchRecord] = {}
        self._lock = threading.Lock()

    def create_watch(self, forest: OpeningForest, moves: Optional[List[str]] = None) -> WatchRecord:
        now = _utcnow()
        moves = list(moves or [])
        record = WatchRecord(
            watch_id=str(uuid4()),
            created_at=now,
            updated_at=now,
            moves=moves,
            opening=detect_opening(forest, moves),
            expires_at=time.time() + self.ttl,
        )
        with self._lock:
            self._purge_expired()
            self._records[record.watch_id] = record
        return record

    def get_watch(self, watch_id: str) -> WatchRecord:
        with self._lock:
            self._purge_expired()
            return self._records[watch_id]

    def update_moves(self, forest: OpeningForest, watch_id: str, moves: List[str]) -> WatchRecord:
        opening = detect_opening(forest, moves)
        with self._lock:
            self._purge_expired()
            record = self._records[watch_id]
            record.moves = list(moves)
            record.opening = opening
            record.updated_at = _utcnow()
            record.expires_at = time.time() + self.ttl
            return record

    def delete_watch(self, watch_id: str) -> None:
        with self._lock:
            del self._records[watch_id]

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._records)

    def _purge_expired(self) -> None:
        now = time.time()
        expired = [watch_id for watch_id, record in self._records.items() if record.expires_at < now]
        for watch_id in expired:
            self._records.pop(watch_id, None)


store = WatchStore(ttl_seconds=settings.watch_ttl_seconds)
