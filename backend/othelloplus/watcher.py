"""Poll a move source on a timer and hand each opening result to a sink."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Union

from .catalogue import OpeningForest
from .moves import split_moves
from .openings import OpeningMatch, detect_opening
from .store import WatchStore

logger = logging.getLogger(__name__)


class MoveSource(Protocol):
    def current_moves(self) -> List[str]:
        """Return the moves played so far, oldest first. May be empty."""
        ...


class PresentationSink(Protocol):
    def present(self, moves: List[str], match: Optional[OpeningMatch]) -> None:
        ...


class FileMoveSource:
    """Reads a concatenated move string (``"f5d6c3..."``) from a text file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def current_moves(self) -> List[str]:
        if not self.path.exists():
            return []
        return split_moves(self.path.read_text(encoding="utf-8"))


class WatchMoveSource:
    def __init__(self, watch_store: WatchStore, watch_id: str) -> None:
        self.watch_store = watch_store
        self.watch_id = watch_id

    def current_moves(self) -> List[str]:
        return list(self.watch_store.get_watch(self.watch_id).moves)


class CallbackSink:
    def __init__(self, callback: Callable[[List[str], Optional[OpeningMatch]], None]) -> None:
        self.callback = callback

    def present(self, moves: List[str], match: Optional[OpeningMatch]) -> None:
        self.callback(moves, match)


class LoggingSink:
    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def present(self, moves: List[str], match: Optional[OpeningMatch]) -> None:
        if match is None:
            self.log.info(f"{len(moves)} moves played, no known opening")
        else:
            self.log.info(match.label())


class OpeningWatcher:
    """
    Re-run opening detection every ``interval`` seconds on a daemon thread.

    The forest is only read; each poll is independent of the previous one.
    A failing poll is logged and the loop carries on with the next tick.
    """

    def __init__(
        self,
        forest: OpeningForest,
        source: MoveSource,
        sink: PresentationSink,
        interval: float = 2.5,
    ) -> None:
        self.forest = forest
        self.source = source
        self.sink = sink
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> Optional[OpeningMatch]:
        moves = self.source.current_moves()
        match = detect_opening(self.forest, moves)
        self.sink.present(moves, match)
        return match

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Opening poll failed: {e}")
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="opening-watcher", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
