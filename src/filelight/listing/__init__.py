"""Directory listing package."""

from .discovery import DirectoryScanner
from .lister import DirectoryLister
from .models import Entry, ScannedEntry, SortDirection, SortKey
from .search import filter_entries
from .sorting import normalize_direction, normalize_sort_key, sort_entries

__all__ = [
    "DirectoryLister",
    "DirectoryScanner",
    "Entry",
    "ScannedEntry",
    "SortDirection",
    "SortKey",
    "filter_entries",
    "normalize_direction",
    "normalize_sort_key",
    "sort_entries",
]
