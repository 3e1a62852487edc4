from __future__ import annotations
import datetime as dt
from typing import Optional, Sequence

from .config import EXPORT_PREFIX

MIME_TYPES = {
    "txt": "text/plain;charset=utf-8",
    "csv": "text/csv;charset=utf-8",
}


def to_txt(phrases: Sequence[str]) -> str:
    return "\n".join(phrases)


def _csv_cell(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def to_csv(phrases: Sequence[str]) -> str:
    """Single column, every value quoted, embedded quotes doubled."""
    return "\n".join(_csv_cell(v) for v in phrases)


def export_filename(fmt: str, day: Optional[dt.date] = None) -> str:
    if fmt not in MIME_TYPES:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    day = day or dt.datetime.now(dt.timezone.utc).date()
    return f"{EXPORT_PREFIX}-{day.isoformat()}.{fmt}"


def render(fmt: str, phrases: Sequence[str]) -> str:
    if fmt == "txt":
        return to_txt(phrases)
    if fmt == "csv":
        return to_csv(phrases)
    raise ValueError(f"Unsupported export format: {fmt!r}")
