# phrasebook/DB/memory_store.py
from __future__ import annotations
from typing import Dict, Mapping, Optional
from .api import KeyValueStore


class MemoryStore(KeyValueStore):
    """Simple in-memory key-value store (useful for tests or ephemeral runs)."""
    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._rows: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._rows.get(key)

    def save(self, key: str, value: str) -> None:
        self._rows[key] = value

    def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    def close(self) -> None:
        self._rows.clear()
