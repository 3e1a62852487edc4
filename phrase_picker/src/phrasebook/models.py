from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Sequence


class ClipboardError(RuntimeError):
    """Raised by a clipboard writer when the payload could not be copied."""


# Collaborator signatures (implemented by the GUI / web layers)
ClipboardWriter = Callable[[str], None]
Downloader = Callable[[str, str, str], None]   # (filename, content, mime_type)
Confirm = Callable[[str], bool]


@dataclass(frozen=True)
class Candidate:
    text: str
    score: int


@dataclass(frozen=True)
class CopyResult:
    ok: bool
    payload: str
    reason: Optional[str] = None


class SelectionCursor:
    """
    Highlighted row in the current suggestion list.
    Range is [-1, n-1]; -1 means nothing is selected.
    """

    def __init__(self) -> None:
        self.index: int = -1
        self._n: int = 0

    def reset(self, n: int) -> None:
        self._n = max(0, n)
        self.index = 0 if self._n else -1

    def down(self) -> int:
        if self._n:
            self.index = (self.index + 1) % self._n
        return self.index

    def up(self) -> int:
        if self._n:
            self.index = (self.index - 1 + self._n) % self._n
        return self.index

    def current(self, candidates: Sequence[str]) -> Optional[str]:
        if 0 <= self.index < len(candidates):
            return candidates[self.index]
        return None
