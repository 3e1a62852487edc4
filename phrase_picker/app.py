# app.py
# CustomTkinter GUI for the phrase picker (dark theme).
# - Live ranked suggestions; arrows move, Enter copies, Tab completes.
# - Every successful copy lands in the result rows pane (Excel-style paste).
# - Catalog management: add, bulk import, reset, custom-phrase window.

from __future__ import annotations
import logging
import os
import tkinter as tk
from typing import List, Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (ensure PYTHONPATH=src, or pip install -e .)
from phrasebook.engine import Engine
from phrasebook.models import ClipboardError, SelectionCursor
from phrasebook import config as CFG


# -------------------- small helpers --------------------

def shorten(text: str, max_chars: int = 60) -> str:
    """Shorten long phrases neatly for labels."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."


def parse_row_number(raw: str) -> Optional[int]:
    """1-based row number typed by the user -> 0-based index (None if not a number)."""
    try:
        return int(raw.strip()) - 1
    except ValueError:
        return None


# -------------------- custom phrases window --------------------

class CustomItemsWindow(ctk.CTkToplevel):
    """Browse, filter, copy, export and delete phrases that are not defaults."""

    def __init__(self, master: "PhrasePickerApp") -> None:
        super().__init__(master)
        self.app = master
        self.title("Custom phrases")
        self.geometry("640x520")
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        bar.grid_columnconfigure(0, weight=1)
        self.entry_filter = ctk.CTkEntry(bar, placeholder_text="Filter custom phrases…")
        self.entry_filter.grid(row=0, column=0, sticky="ew", padx=(12, 6), pady=10)
        self.entry_filter.bind("<KeyRelease>", lambda _ev: self.refresh())
        ctk.CTkButton(bar, text="Copy", width=70, command=self._copy).grid(row=0, column=1, padx=4)
        ctk.CTkButton(bar, text=".txt", width=60, command=lambda: self._export("txt")).grid(row=0, column=2, padx=4)
        ctk.CTkButton(bar, text=".csv", width=60, command=lambda: self._export("csv")).grid(row=0, column=3, padx=4)
        ctk.CTkButton(bar, text="Remove all", width=90, command=self._clear_all).grid(row=0, column=4, padx=(4, 12))

        self.list_frame = ctk.CTkScrollableFrame(self, corner_radius=8)
        self.list_frame.grid(row=1, column=0, sticky="nsew", padx=12, pady=(6, 12))
        self.list_frame.grid_columnconfigure(0, weight=1)

        self.bind("<Escape>", lambda _ev: self.destroy())
        self.refresh()

    @property
    def query(self) -> str:
        return self.entry_filter.get()

    def refresh(self) -> None:
        for child in self.list_frame.winfo_children():
            child.destroy()
        items = self.app.engine.custom_items(self.query)
        if not items:
            ctk.CTkLabel(self.list_frame, text="(no custom phrases)").grid(row=0, column=0, pady=8)
            return
        for i, phrase in enumerate(items):
            ctk.CTkLabel(self.list_frame, text=phrase, anchor="w").grid(row=i, column=0, sticky="ew", padx=6, pady=2)
            ctk.CTkButton(
                self.list_frame, text="Delete", width=64,
                command=lambda p=phrase: self._remove(p),
            ).grid(row=i, column=1, padx=6, pady=2)

    def _remove(self, phrase: str) -> None:
        self.app.engine.catalog.remove(phrase)
        self.app.refresh_all()

    def _copy(self) -> None:
        result = self.app.engine.copy_custom(self.app.write_clipboard, self.query)
        self.app.report_copy(result, "Copied custom phrases (one per line).")

    def _export(self, fmt: str) -> None:
        name = self.app.engine.export_custom(fmt, self.app.save_file, query=self.query)
        self.app.log_event(f"Export requested: {name}")

    def _clear_all(self) -> None:
        removed = self.app.engine.clear_custom(lambda msg: mb.askyesno("Confirm", msg, parent=self))
        if removed:
            self.app.log_event(f"Removed {removed} custom phrases.")
        self.app.refresh_all()


# -------------------- main app --------------------

class PhrasePickerApp(ctk.CTk):
    """Dark-themed GUI over the phrase Engine; hosts the clipboard and file dialogs."""

    def __init__(self, dsn: Optional[str] = None) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("Phrase Picker")
        self.geometry("920x760")
        self.minsize(820, 620)

        # State
        self.engine = Engine().open(dsn or CFG.DEFAULT_DSN)
        self.suggestions: List[str] = []
        self.cursor = SelectionCursor()
        self._search_after_id: Optional[str] = None
        self._flash_after_id: Optional[str] = None
        self._custom_window: Optional[CustomItemsWindow] = None

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)  # suggestions
        self.grid_rowconfigure(3, weight=1)  # rows

        # Build UI
        self._build_header()
        self._build_search()
        self._build_suggestions()
        self._build_rows()
        self._build_catalog()
        self._build_log()

        self.refresh_all()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(header, text="Phrase Picker", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )
        self.lbl_flash = ctk.CTkLabel(header, text="", font=self.font_label, text_color="#45d483")
        self.lbl_flash.grid(row=0, column=1, sticky="e", padx=12, pady=10)

    def _build_search(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Search:", font=self.font_label).grid(row=0, column=0, sticky="w", padx=12, pady=10)
        self.entry_query = ctk.CTkEntry(box, placeholder_text="Type to search… e.g. CARTON BOX NO.")
        self.entry_query.grid(row=0, column=1, sticky="ew", padx=6, pady=10)
        ctk.CTkButton(box, text="✕", width=32, command=self._clear_query).grid(row=0, column=2, padx=(0, 12))

        self.entry_query.bind("<KeyRelease>", self._on_query_changed)
        self.entry_query.bind("<Down>", self._on_down)
        self.entry_query.bind("<Up>", self._on_up)
        self.entry_query.bind("<Return>", self._on_enter)
        self.entry_query.bind("<Tab>", self._on_tab)
        self.entry_query.bind("<Escape>", lambda _ev: self._clear_query())

    def _build_suggestions(self) -> None:
        self.sugg_frame = ctk.CTkScrollableFrame(self, corner_radius=10, label_text="Suggestions")
        self.sugg_frame.grid(row=2, column=0, sticky="nsew", padx=12, pady=6)
        self.sugg_frame.grid_columnconfigure(0, weight=1)

    def _build_rows(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(frame, fg_color="transparent")
        bar.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 2))
        ctk.CTkLabel(bar, text="Copied rows", font=self.font_label).pack(side="left")
        ctk.CTkButton(bar, text="Clear", width=70, command=self._clear_rows).pack(side="right", padx=4)
        ctk.CTkButton(bar, text="Remove #", width=80, command=self._remove_row).pack(side="right", padx=4)
        self.entry_row = ctk.CTkEntry(bar, width=50, placeholder_text="#")
        self.entry_row.pack(side="right", padx=4)
        ctk.CTkButton(bar, text="Copy all (row)", command=lambda: self._copy_rows("row")).pack(side="right", padx=4)
        ctk.CTkButton(bar, text="Copy all (column)", command=lambda: self._copy_rows("column")).pack(side="right", padx=4)

        self.txt_rows = ctk.CTkTextbox(frame, wrap="none", font=self.font_mono, height=140)
        self.txt_rows.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_rows.configure(state="disabled")

    def _build_catalog(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="ew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)

        self.entry_new = ctk.CTkEntry(frame, placeholder_text="Add one phrase")
        self.entry_new.grid(row=0, column=0, sticky="ew", padx=(12, 6), pady=(10, 4))
        self.entry_new.bind("<Return>", lambda _ev: self._add_phrase())
        ctk.CTkButton(frame, text="Add", width=70, command=self._add_phrase).grid(row=0, column=1, padx=4, pady=(10, 4))
        ctk.CTkButton(frame, text="Custom phrases…", command=self._open_custom).grid(row=0, column=2, padx=4, pady=(10, 4))
        ctk.CTkButton(frame, text="Reset to defaults", command=self._reset_catalog).grid(row=0, column=3, padx=(4, 12), pady=(10, 4))

        self.txt_bulk = ctk.CTkTextbox(frame, height=70, font=self.font_mono)
        self.txt_bulk.grid(row=1, column=0, columnspan=3, sticky="ew", padx=(12, 6), pady=(4, 10))
        ctk.CTkButton(frame, text="Import lines", command=self._import_bulk).grid(row=1, column=3, padx=(4, 12), pady=(4, 10))

    def _build_log(self) -> None:
        self.txt_log = ctk.CTkTextbox(self, height=70, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=5, column=0, sticky="ew", padx=12, pady=(6, 12))
        self.log_event(f"Ready. {len(self.engine.catalog)} phrases, {len(self.engine.rows)} rows.")

    # --------- collaborators ---------

    def write_clipboard(self, text: str) -> None:
        try:
            self.clipboard_clear()
            self.clipboard_append(text)
            self.update()  # keep the selection alive on X11
        except tk.TclError as exc:
            raise ClipboardError(str(exc)) from exc

    def save_file(self, filename: str, content: str, mime: str) -> None:
        ext = os.path.splitext(filename)[1]
        path = fd.asksaveasfilename(
            title="Save custom phrases", initialfile=filename, defaultextension=ext,
            filetypes=[(mime.split(";")[0], f"*{ext}"), ("All files", "*.*")],
        )
        if not path:
            return
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.log_event(f"Saved {path}")

    def report_copy(self, result, ok_message: str) -> None:
        if result.ok:
            self.log_event(ok_message)
        else:
            mb.showerror("Copy failed", f"Copy failed\n{result.reason}")

    # --------- search ---------

    def _on_query_changed(self, ev=None) -> None:
        if ev is not None and ev.keysym in ("Up", "Down", "Return", "Tab", "Escape"):
            return
        # debounce for smoother typing
        if self._search_after_id is not None:
            self.after_cancel(self._search_after_id)
        self._search_after_id = self.after(120, self._do_search)

    def _do_search(self) -> None:
        self._search_after_id = None
        self.suggestions = self.engine.suggest(self.entry_query.get())
        self.cursor.reset(len(self.suggestions))
        self._render_suggestions()

    def _render_suggestions(self) -> None:
        for child in self.sugg_frame.winfo_children():
            child.destroy()
        if not self.suggestions:
            ctk.CTkLabel(self.sugg_frame, text="(no matches; add it below)").grid(row=0, column=0, pady=8)
            return
        for i, phrase in enumerate(self.suggestions):
            selected = i == self.cursor.index
            ctk.CTkButton(
                self.sugg_frame, text=phrase, anchor="w",
                fg_color=("#1f6aa5" if selected else "transparent"),
                command=lambda p=phrase: self._copy_phrase(p),
            ).grid(row=i, column=0, sticky="ew", padx=4, pady=1)

    def _on_down(self, _ev=None) -> str:
        self.cursor.down()
        self._render_suggestions()
        return "break"

    def _on_up(self, _ev=None) -> str:
        self.cursor.up()
        self._render_suggestions()
        return "break"

    def _on_enter(self, _ev=None) -> str:
        phrase = self.cursor.current(self.suggestions)
        if phrase is not None:
            self._copy_phrase(phrase)
        return "break"

    def _on_tab(self, _ev=None) -> Optional[str]:
        phrase = self.cursor.current(self.suggestions)
        if phrase is None:
            return None
        typed = len(self.entry_query.get())
        self.entry_query.delete(0, "end")
        self.entry_query.insert(0, phrase)
        self.entry_query.select_range(typed, "end")
        self._do_search()
        return "break"

    def _clear_query(self) -> None:
        self.entry_query.delete(0, "end")
        self._do_search()
        self.entry_query.focus_set()

    # --------- copy ---------

    def _copy_phrase(self, phrase: str) -> None:
        result = self.engine.copy(phrase, self.write_clipboard)
        if not result.ok:
            mb.showerror("Copy failed", f"Copy failed\n{result.reason}")
            return
        self._flash(f"Copied: {shorten(phrase, 40)}")
        self._render_rows()

    def _flash(self, text: str) -> None:
        # a newer copy supersedes the pending clear
        if self._flash_after_id is not None:
            self.after_cancel(self._flash_after_id)
        self.lbl_flash.configure(text=text)
        self._flash_after_id = self.after(CFG.COPY_FLASH_MS, lambda: self.lbl_flash.configure(text=""))

    def _copy_rows(self, layout: str) -> None:
        result = self.engine.copy_rows(self.write_clipboard, layout)
        msg = ("Copied all rows as one column." if layout == "column"
               else "Copied all rows as one tab-separated row.")
        self.report_copy(result, msg)

    # --------- rows ---------

    def _render_rows(self) -> None:
        self.txt_rows.configure(state="normal")
        self.txt_rows.delete("0.0", "end")
        rows = self.engine.rows.rows
        if rows:
            self.txt_rows.insert("end", "\n".join(f"{i:>3}  {r}" for i, r in enumerate(rows, 1)))
        else:
            self.txt_rows.insert("end", "(nothing copied yet)")
        self.txt_rows.configure(state="disabled")

    def _remove_row(self) -> None:
        idx = parse_row_number(self.entry_row.get())
        if idx is None or not self.engine.rows.remove_at(idx):
            self.log_event("No such row.")
        self.entry_row.delete(0, "end")
        self._render_rows()

    def _clear_rows(self) -> None:
        self.engine.rows.clear()
        self._render_rows()

    # --------- catalog ---------

    def _add_phrase(self) -> None:
        if self.engine.catalog.add(self.entry_new.get()):
            self.log_event(f"Added: {shorten(self.entry_new.get().strip())}")
        self.entry_new.delete(0, "end")
        self.refresh_all()

    def _import_bulk(self) -> None:
        added = self.engine.catalog.bulk_import(self.txt_bulk.get("0.0", "end"))
        self.txt_bulk.delete("0.0", "end")
        self.log_event(f"Imported {added} new phrases.")
        self.refresh_all()

    def _reset_catalog(self) -> None:
        if mb.askyesno("Confirm", "Reset the catalog to the default phrases?"):
            self.engine.catalog.reset_to_default()
            self.refresh_all()

    def _open_custom(self) -> None:
        if self._custom_window is not None and self._custom_window.winfo_exists():
            self._custom_window.focus()
            return
        self._custom_window = CustomItemsWindow(self)

    # --------- misc UI helpers ---------

    def refresh_all(self) -> None:
        self._do_search()
        self._render_rows()
        if self._custom_window is not None and self._custom_window.winfo_exists():
            self._custom_window.refresh()

    def log_event(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self.engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    if os.environ.get("PHRASEBOOK_VERBOSE") == "1":
        logging.basicConfig(level=logging.INFO)
    app = PhrasePickerApp()
    app.mainloop()
