from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from .config import SUGGESTION_LIMIT
from .models import Candidate
from .normalize import normalize

# Score bands: any prefix hit outranks any substring hit for phrases under 500 chars
PREFIX_BASE = 1000
SUBSTRING_BASE = 500


def score(nt: str, nq: str) -> Optional[int]:
    """
    Score a normalized phrase against a normalized query.
      - prefix match:    1000 - len(phrase)   (tighter phrases first)
      - substring match: 500 - first index    (earlier hits first)
      - otherwise None (phrase is excluded)
    Matching is literal; the query is never compiled into a pattern.
    """
    if nt.startswith(nq):
        return PREFIX_BASE - len(nt)
    pos = nt.find(nq)
    if pos >= 0:
        return SUBSTRING_BASE - pos
    return None


def candidates(catalog: Iterable[str], query: str) -> List[Candidate]:
    """Matching phrases with their scores, in catalog order."""
    nq = normalize(query)
    out: List[Candidate] = []
    for text in catalog:
        s = score(normalize(text), nq)
        if s is not None:
            out.append(Candidate(text, s))
    return out


def rank(catalog: Sequence[str], query: str, limit: int = SUGGESTION_LIMIT) -> List[str]:
    """
    Ordered suggestions for `query`.
    A blank query returns the first `limit` phrases unranked.
    Equal scores keep their catalog order (sorted() is stable).
    """
    limit = max(0, int(limit))
    if not query.strip():
        return list(catalog[:limit])
    ranked = sorted(candidates(catalog, query), key=lambda c: -c.score)
    return [c.text for c in ranked[:limit]]


def filter_phrases(phrases: Sequence[str], query: str) -> List[str]:
    """Accent/case-insensitive contains filter; keeps input order, no limit."""
    if not query.strip():
        return list(phrases)
    nq = normalize(query)
    return [p for p in phrases if nq in normalize(p)]
