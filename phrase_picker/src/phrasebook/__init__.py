"""Phrase lookup core: normalization, ranking, catalog and copy log."""
from .engine import Engine
from .normalize import normalize
from .search import rank

__all__ = ["Engine", "normalize", "rank"]
