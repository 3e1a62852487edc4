# phrasebook/catalog.py
from __future__ import annotations
import logging
import re
from typing import Iterator, List, Optional, Sequence

from .config import DEFAULT_ITEMS, STORAGE_KEY_ITEMS
from .DB.api import KeyValueStore, load_list, save_list

log = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


class CatalogStore:
    """
    Ordered, duplicate-free list of known phrases.

    Equality is exact (case and accents matter): "A" and "a" are two phrases.
    When a key-value store is attached, every mutation writes the whole list
    back under STORAGE_KEY_ITEMS as a JSON array.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        defaults: Sequence[str] = DEFAULT_ITEMS,
        key: str = STORAGE_KEY_ITEMS,
    ) -> None:
        self._store = store
        self._key = key
        self.defaults: tuple[str, ...] = tuple(defaults)
        self._items: List[str] = list(dict.fromkeys(self.defaults))

    # ------------- persistence -------------

    def load(self) -> None:
        """Replace the in-memory list with the stored one (defaults if absent/malformed)."""
        stored = load_list(self._store, self._key) if self._store is not None else None
        if stored is None:
            self._items = list(dict.fromkeys(self.defaults))
        else:
            self._items = list(dict.fromkeys(stored))
        log.info("Catalog loaded: %d phrases", len(self._items))

    def _commit(self) -> None:
        if self._store is not None:
            save_list(self._store, self._key, self._items)

    # ------------- read -------------

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._items))

    def __contains__(self, phrase: object) -> bool:
        return phrase in self._items

    def custom_subset(self) -> List[str]:
        """Phrases not in the default set, in catalog order."""
        defaults = set(self.defaults)
        return [x for x in self._items if x not in defaults]

    # ------------- mutations -------------

    def insert_front(self, phrase: str) -> bool:
        if phrase in self._items:
            return False
        self._items.insert(0, phrase)
        log.debug("Inserted %r", phrase)
        self._commit()
        return True

    def add(self, raw: str) -> bool:
        """Manual add: trimmed, blank input ignored, new phrases go first."""
        phrase = raw.strip()
        if not phrase:
            return False
        return self.insert_front(phrase)

    def bulk_import(self, raw_text: str) -> int:
        """
        One phrase per line (LF or CRLF). Lines are trimmed, blanks dropped,
        and the rest unioned into the catalog after the existing phrases.
        Returns how many phrases were new.
        """
        lines = [s.strip() for s in _LINE_BREAK.split(raw_text)]
        lines = [s for s in lines if s]
        if not lines:
            return 0
        merged = dict.fromkeys(self._items)
        before = len(merged)
        merged.update(dict.fromkeys(lines))
        added = len(merged) - before
        self._items = list(merged)
        log.debug("Bulk import: %d lines, %d new", len(lines), added)
        self._commit()
        return added

    def remove(self, phrase: str) -> bool:
        if phrase not in self._items:
            return False
        self._items = [x for x in self._items if x != phrase]
        log.debug("Removed %r", phrase)
        self._commit()
        return True

    def reset_to_default(self) -> None:
        self._items = list(dict.fromkeys(self.defaults))
        log.debug("Catalog reset to %d default phrases", len(self._items))
        self._commit()

    def clear_custom(self) -> int:
        """Drop every non-default phrase; callers confirm with the user first."""
        defaults = set(self.defaults)
        kept = [x for x in self._items if x in defaults]
        removed = len(self._items) - len(kept)
        self._items = kept
        log.debug("Cleared %d custom phrases", removed)
        self._commit()
        return removed
