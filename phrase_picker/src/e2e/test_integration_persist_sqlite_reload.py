from pathlib import Path
import pytest
from phrasebook.engine import Engine
from phrasebook.config import DEFAULT_ITEMS

@pytest.mark.e2e
def test_persist_sqlite_and_reload(tmp_path: Path):
    dsn = f"sqlite:///{tmp_path / 'state' / 'phrases.sqlite'}"

    e1 = Engine().open(dsn)
    try:
        assert e1.catalog.items == DEFAULT_ITEMS
        e1.catalog.add("Crème brûlée tray")
        e1.catalog.remove("CARTON BOX NO.26")
        e1.copy("CARTON BOX NO.30", lambda _text: None)
        e1.copy("CARTON BOX NO.30", lambda _text: None)
    finally:
        e1.shutdown()

    e2 = Engine().open(dsn)
    try:
        assert e2.catalog.items[0] == "Crème brûlée tray"
        assert "CARTON BOX NO.26" not in e2.catalog
        assert e2.rows.rows == ("CARTON BOX NO.30", "CARTON BOX NO.30")
        assert e2.suggest("creme")[0] == "Crème brûlée tray"
    finally:
        e2.shutdown()

@pytest.mark.e2e
def test_unknown_dsn_is_rejected():
    with pytest.raises(ValueError):
        Engine().open("redis://localhost")

@pytest.mark.e2e
def test_mutations_from_worker_thread_are_saved(tmp_path: Path):
    import threading
    dsn = f"sqlite:///{tmp_path / 'threaded.sqlite'}"

    e1 = Engine().open(dsn)
    try:
        def work():
            e1.catalog.add("from thread")
            e1.rows.append("R")
        t = threading.Thread(target=work)
        t.start()
        t.join()
    finally:
        e1.shutdown()

    e2 = Engine().open(dsn)
    try:
        assert "from thread" in e2.catalog
        assert e2.rows.rows == ("R",)
    finally:
        e2.shutdown()

@pytest.mark.e2e
def test_reopen_closes_previous_store():
    from phrasebook.DB.memory_store import MemoryStore

    class TrackingStore(MemoryStore):
        closed = False
        def close(self):
            self.closed = True
            super().close()

    first, second = TrackingStore(), TrackingStore()
    eng = Engine().open(store=first)
    eng.open(store=second)
    assert first.closed is True
    assert second.closed is False
    eng.open(store=second)
    assert second.closed is False
    eng.shutdown()
    assert second.closed is True
