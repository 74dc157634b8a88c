import logging
import threading
import time

import pytest

from othelloplus.catalogue import compile_catalogue
from othelloplus.openings import OpeningMatch
from othelloplus.store import WatchStore
from othelloplus.watcher import (
    CallbackSink,
    FileMoveSource,
    LoggingSink,
    OpeningWatcher,
    WatchMoveSource,
)

FOREST = compile_catalogue(["F5D6:Perpendicular", "F5D6C3D3C4:Tiger"])


class ListSource:
    def __init__(self, moves):
        self.moves = moves

    def current_moves(self):
        return list(self.moves)


class FailingSource:
    def __init__(self):
        self.calls = 0

    def current_moves(self):
        self.calls += 1
        raise RuntimeError("page not ready")


def test_file_source_reads_move_string(tmp_path):
    path = tmp_path / "moves.txt"
    assert FileMoveSource(path).current_moves() == []
    path.write_text("f5d6c3\n", encoding="utf-8")
    assert FileMoveSource(path).current_moves() == ["F5", "D6", "C3"]


def test_poll_once_presents_match():
    seen = []
    watcher = OpeningWatcher(FOREST, ListSource(["F5", "D6", "C3", "D3", "C4"]), CallbackSink(lambda m, r: seen.append((m, r))))
    match = watcher.poll_once()
    assert match == OpeningMatch("Tiger", ("F5", "D6", "C3", "D3", "C4"))
    assert seen == [(["F5", "D6", "C3", "D3", "C4"], match)]


def test_poll_once_with_no_moves():
    seen = []
    watcher = OpeningWatcher(FOREST, ListSource([]), CallbackSink(lambda m, r: seen.append(r)))
    assert watcher.poll_once() is None
    assert seen == [None]


def test_poll_follows_growing_game():
    source = ListSource(["F5"])
    names = []
    watcher = OpeningWatcher(FOREST, source, CallbackSink(lambda m, r: names.append(r and r.name)))
    watcher.poll_once()
    source.moves = ["F5", "D6"]
    watcher.poll_once()
    source.moves = ["F5", "D6", "C3", "D3", "C4", "F4"]
    watcher.poll_once()
    assert names == [None, "Perpendicular", "Tiger"]


def test_logging_sink(caplog):
    sink = LoggingSink()
    with caplog.at_level(logging.INFO, logger="othelloplus.watcher"):
        sink.present(["F5", "D6"], OpeningMatch("Perpendicular", ("F5", "D6")))
        sink.present(["A1"], None)
    assert "Opening: Perpendicular (F5 D6)" in caplog.text
    assert "no known opening" in caplog.text


def test_background_thread_polls_until_stopped():
    polled = threading.Event()
    watcher = OpeningWatcher(FOREST, ListSource(["F5", "D6"]), CallbackSink(lambda m, r: polled.set()), interval=0.01)
    watcher.start()
    try:
        assert polled.wait(2.0)
        assert watcher.running
    finally:
        watcher.stop(timeout=2.0)
    assert not watcher.running


def test_failed_poll_is_logged_and_loop_continues(caplog):
    source = FailingSource()
    watcher = OpeningWatcher(FOREST, source, CallbackSink(lambda m, r: None), interval=0.01)
    with caplog.at_level(logging.ERROR, logger="othelloplus.watcher"):
        watcher.start()
        try:
            for _ in range(200):
                if source.calls >= 2:
                    break
                time.sleep(0.01)
        finally:
            watcher.stop(timeout=2.0)
    assert source.calls >= 2
    assert "Opening poll failed: page not ready" in caplog.text


def test_watch_store_source():
    store = WatchStore()
    record = store.create_watch(FOREST, ["F5"])
    source = WatchMoveSource(store, record.watch_id)
    store.update_moves(FOREST, record.watch_id, ["F5", "D6"])
    assert source.current_moves() == ["F5", "D6"]
    with pytest.raises(KeyError):
        WatchMoveSource(store, "missing").current_moves()


def test_watch_store_classifies_on_update():
    store = WatchStore()
    record = store.create_watch(FOREST)
    assert record.opening is None
    updated = store.update_moves(FOREST, record.watch_id, ["F5", "D6", "C3", "D3", "C4"])
    assert updated.opening.name == "Tiger"
    assert updated.updated_at >= updated.created_at
    response = updated.to_response()
    assert response.numbered_moves[-1] == "5. C4"
    assert response.opening.label == "Opening: Tiger (F5 D6 C3 D3 C4)"


def test_watch_store_expires_idle_watches():
    store = WatchStore(ttl_seconds=-1)
    record = store.create_watch(FOREST, ["F5"])
    with pytest.raises(KeyError):
        store.get_watch(record.watch_id)
    assert len(store) == 0
