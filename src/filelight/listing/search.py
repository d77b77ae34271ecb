"""Text search over listing entries."""

from __future__ import annotations

from typing import Iterable, List

from .models import Entry


def matches_query(entry: Entry, query: str) -> bool:
    """Return whether ``query`` occurs in the entry name or description, ignoring case."""
    needle = query.casefold()
    return needle in entry.name.casefold() or needle in (entry.description or "").casefold()


def filter_entries(entries: Iterable[Entry], query: str | None) -> List[Entry]:
    """Keep entries matching ``query``; an empty query keeps everything."""
    if not query:
        return list(entries)
    return [entry for entry in entries if matches_query(entry, query)]


__all__ = ["filter_entries", "matches_query"]
