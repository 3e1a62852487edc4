# phrasebook/result_log.py
from __future__ import annotations
import logging
from typing import Iterator, List, Optional

from .config import STORAGE_KEY_ROWS
from .DB.api import KeyValueStore, load_list, save_list

log = logging.getLogger(__name__)

COLUMN_SEP = "\n"   # pastes as one column, many rows
ROW_SEP = "\t"      # pastes as one row, many columns


class ResultLog:
    """Order-preserving record of copied phrases; duplicates allowed."""

    def __init__(self, store: Optional[KeyValueStore] = None, *, key: str = STORAGE_KEY_ROWS) -> None:
        self._store = store
        self._key = key
        self._rows: List[str] = []

    def load(self) -> None:
        stored = load_list(self._store, self._key) if self._store is not None else None
        self._rows = stored if stored is not None else []
        log.info("Result log loaded: %d rows", len(self._rows))

    def _commit(self) -> None:
        if self._store is not None:
            save_list(self._store, self._key, self._rows)

    @property
    def rows(self) -> tuple[str, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._rows))

    def __getitem__(self, index: int) -> str:
        return self._rows[index]

    def append(self, phrase: str) -> None:
        self._rows.append(phrase)
        self._commit()

    def remove_at(self, index: int) -> bool:
        """Out-of-range (negative included) is a no-op."""
        if not 0 <= index < len(self._rows):
            return False
        del self._rows[index]
        self._commit()
        return True

    def clear(self) -> None:
        self._rows = []
        self._commit()

    def serialize_column(self) -> str:
        return COLUMN_SEP.join(self._rows)

    def serialize_row(self) -> str:
        return ROW_SEP.join(self._rows)
