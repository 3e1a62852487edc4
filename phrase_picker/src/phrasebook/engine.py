# phrasebook/engine.py
from __future__ import annotations

import logging
from typing import List, Optional

from . import config as CFG
from . import export
from .catalog import CatalogStore
from .result_log import ResultLog
from .search import rank, filter_phrases
from .models import ClipboardError, ClipboardWriter, Confirm, CopyResult, Downloader
from .DB.api import KeyValueStore, make_store

log = logging.getLogger(__name__)

_LAYOUTS = ("column", "row")


class Engine:
    """
    Thin orchestration layer that glues together:
      - a key-value store (SQLite or in-memory) for persistence,
      - the phrase catalog (CatalogStore),
      - the copy log (ResultLog),
      - ranking (search.rank).

    Public API (used by the GUI, CLI and Flask):
      * open(dsn):            attach storage -> load catalog and rows
      * suggest(query, limit): ranked phrases for a query
      * copy(phrase, write_text): clipboard write, then append to the log
      * copy_rows / copy_custom / export_custom / clear_custom
      * shutdown():           close underlying resources

    Collaborators (clipboard, downloader, confirm prompt) are passed per call,
    so the engine itself never touches a UI toolkit.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._store: Optional[KeyValueStore] = None
        self._catalog: Optional[CatalogStore] = None
        self._rows: Optional[ResultLog] = None

    # /* ~~~ Attach storage and load both lists from it ~~~ */
    def open(self, dsn: Optional[str] = None, *, store: Optional[KeyValueStore] = None) -> "Engine":
        if store is None:
            dsn = dsn or CFG.DEFAULT_DSN
            log.info("Initializing key-value store: %s", dsn)
            store = make_store(dsn)
        # re-opening releases the previous backend first
        if self._store is not None and self._store is not store:
            self._store.close()
        self._store = store
        self._catalog = CatalogStore(store)
        self._rows = ResultLog(store)
        self._catalog.load()
        self._rows.load()
        log.info("Engine open() complete: phrases=%d rows=%d", len(self._catalog), len(self._rows))
        return self

    @property
    def catalog(self) -> CatalogStore:
        if self._catalog is None:
            raise RuntimeError("Engine not initialized. Call open() first.")
        return self._catalog

    @property
    def rows(self) -> ResultLog:
        if self._rows is None:
            raise RuntimeError("Engine not initialized. Call open() first.")
        return self._rows

    # ------------- query -------------

    def suggest(self, query: str, *, limit: int = CFG.SUGGESTION_LIMIT) -> List[str]:
        return rank(self.catalog.items, query, limit)

    def custom_items(self, query: str = "") -> List[str]:
        return filter_phrases(self.catalog.custom_subset(), query)

    # ------------- copy -------------

    def _write(self, payload: str, write_text: ClipboardWriter) -> CopyResult:
        try:
            write_text(payload)
        except ClipboardError as exc:
            log.warning("Clipboard write failed: %s", exc)
            return CopyResult(ok=False, payload=payload, reason=str(exc))
        return CopyResult(ok=True, payload=payload)

    # /* ~~~ Copy one phrase; only a confirmed write lands in the log ~~~ */
    def copy(self, phrase: str, write_text: ClipboardWriter) -> CopyResult:
        result = self._write(phrase, write_text)
        if result.ok:
            self.rows.append(phrase)
        return result

    def rows_payload(self, layout: str = "column") -> str:
        if layout == "column":
            return self.rows.serialize_column()
        if layout == "row":
            return self.rows.serialize_row()
        raise ValueError(f"Unknown layout {layout!r}; expected one of {_LAYOUTS}")

    def copy_rows(self, write_text: ClipboardWriter, layout: str = "column") -> CopyResult:
        return self._write(self.rows_payload(layout), write_text)

    def copy_custom(self, write_text: ClipboardWriter, query: str = "") -> CopyResult:
        return self._write(export.to_txt(self.custom_items(query)), write_text)

    # ------------- custom subset -------------

    def export_custom(self, fmt: str, download: Downloader, *, query: str = "", day=None) -> str:
        """Hand the (filtered) custom phrases to `download`; returns the filename."""
        filename = export.export_filename(fmt, day)
        content = export.render(fmt, self.custom_items(query))
        download(filename, content, export.MIME_TYPES[fmt])
        log.info("Exported custom phrases to %s", filename)
        return filename

    def clear_custom(self, confirm: Confirm) -> int:
        n = len(self.catalog.custom_subset())
        if not n:
            return 0
        if not confirm(f"Remove all {n} custom phrases?"):
            return 0
        return self.catalog.clear_custom()

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._catalog = None
            self._rows = None
            log.info("Engine shutdown complete")
