"""Pure derivations from a catalog and its filter state."""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from mediacat.catalog.models import CatalogEntry

from .models import FilterState, Stats


def compute_stats(entries: Sequence[CatalogEntry]) -> Stats:
    """Count entries overall and per media type."""
    counts = Counter(entry.type for entry in entries)
    return Stats(
        total=len(entries),
        image=counts["image"],
        video=counts["video"],
        doc=counts["doc"],
        other=counts["other"],
    )


def matches(entry: CatalogEntry, state: FilterState) -> bool:
    """Return True when ``entry`` passes both the category and search predicates."""
    if state.category != "all" and entry.type != state.category:
        return False
    return state.needle in entry.name.lower()


def filter_entries(entries: Sequence[CatalogEntry], state: FilterState) -> List[CatalogEntry]:
    """Return the entries matching ``state``, preserving catalog order."""
    return [entry for entry in entries if matches(entry, state)]


__all__ = ["compute_stats", "matches", "filter_entries"]
