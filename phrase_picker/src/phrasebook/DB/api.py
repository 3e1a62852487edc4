# phrasebook/DB/api.py
from __future__ import annotations
import json
import logging
import os
import sqlite3
from typing import Iterable, Optional, Protocol

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    # Read
    def load(self, key: str) -> Optional[str]: ...
    # Write
    def save(self, key: str, value: str) -> None: ...
    # Delete
    def delete(self, key: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> KeyValueStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (file and table are created when missing)
      - memory://      -> MemoryStore (lost on close)
    """
    if dsn.startswith("sqlite:///"):
        path = dsn.removeprefix("sqlite:///")
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        from .sqlite_store import SQLiteStore
        return SQLiteStore(path)

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")


# ---- JSON array payloads ----

def decode_list(raw: Optional[str]) -> Optional[list[str]]:
    """Parse a stored JSON array of strings; None when absent or malformed."""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        return None
    return data


def encode_list(items: Iterable[str]) -> str:
    return json.dumps(list(items), ensure_ascii=False)


def load_list(store: KeyValueStore, key: str) -> Optional[list[str]]:
    raw = store.load(key)
    items = decode_list(raw)
    if items is None and raw is not None:
        log.warning("Ignoring malformed payload under %r", key)
    return items


def save_list(store: KeyValueStore, key: str, items: Iterable[str]) -> bool:
    """Best-effort write; a failing backend is logged, not raised."""
    try:
        store.save(key, encode_list(items))
    except (OSError, sqlite3.Error) as exc:
        log.warning("Could not persist %r: %s", key, exc)
        return False
    return True
