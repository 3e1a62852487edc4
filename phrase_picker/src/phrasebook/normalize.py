from __future__ import annotations
import unicodedata

# Combining Diacritical Marks block
_MARKS_LO = 0x0300
_MARKS_HI = 0x036F


def _is_mark(ch: str) -> bool:
    return _MARKS_LO <= ord(ch) <= _MARKS_HI


def normalize(text: str) -> str:
    """
    Comparison form of a phrase:
      * casefolded (locale independent)
      * decomposed (NFD) with combining diacritical marks dropped,
        so "é" compares equal to "e"
    """
    decomposed = unicodedata.normalize("NFD", text.casefold())
    return "".join(ch for ch in decomposed if not _is_mark(ch))
