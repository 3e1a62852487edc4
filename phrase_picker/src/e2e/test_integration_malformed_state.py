import sqlite3
import pytest
from phrasebook.engine import Engine
from phrasebook.config import DEFAULT_ITEMS, STORAGE_KEY_ITEMS, STORAGE_KEY_ROWS
from phrasebook.DB.memory_store import MemoryStore

@pytest.mark.e2e
@pytest.mark.parametrize("items_raw, rows_raw", [
    ("{not json", "nope"),
    ('{"a": 1}', "[1, 2]"),
    ('["ok", 3]', '"X"'),
])
def test_malformed_payloads_fall_back(items_raw, rows_raw):
    store = MemoryStore({STORAGE_KEY_ITEMS: items_raw, STORAGE_KEY_ROWS: rows_raw})
    eng = Engine().open(store=store)
    try:
        assert eng.catalog.items == DEFAULT_ITEMS
        assert eng.rows.rows == ()
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_stored_duplicates_collapse_on_load():
    store = MemoryStore({STORAGE_KEY_ITEMS: '["B", "A", "B"]', STORAGE_KEY_ROWS: '["B", "B"]'})
    eng = Engine().open(store=store)
    assert eng.catalog.items == ("B", "A")
    assert eng.rows.rows == ("B", "B")

class _BrokenStore(MemoryStore):
    def save(self, key, value):
        raise sqlite3.OperationalError("disk I/O error")

@pytest.mark.e2e
def test_failed_save_does_not_block_mutation():
    eng = Engine().open(store=_BrokenStore())
    assert eng.catalog.add("still here") is True
    eng.rows.append("row")
    assert eng.catalog.items[0] == "still here"
    assert eng.rows.rows == ("row",)
