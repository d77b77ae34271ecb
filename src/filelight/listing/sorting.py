"""Comparators for ordering listing entries.

Every ordering is the composition of ``directories_first`` with one column
comparator looked up in :data:`COMPARATORS`. Direction only flips the column
comparator, so directories lead in both directions.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Mapping

from .models import Entry, SortDirection, SortKey

Comparator = Callable[[Entry, Entry], int]

DEFAULT_SORT_KEY: SortKey = "name"
DEFAULT_DIRECTION: SortDirection = "asc"

_DIGITS = "0123456789"
_DESCENDING = {"desc", "descending"}


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def _digit_run_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    return end


def natural_compare(left: str, right: str) -> int:
    """Compare strings case-insensitively, treating digit runs as numbers."""
    a, b = left.casefold(), right.casefold()
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] in _DIGITS and b[j] in _DIGITS:
            end_a, end_b = _digit_run_end(a, i), _digit_run_end(b, j)
            result = _cmp(int(a[i:end_a]), int(b[j:end_b]))
            if result:
                return result
            i, j = end_a, end_b
            continue
        if a[i] != b[j]:
            return _cmp(a[i], b[j])
        i += 1
        j += 1
    return _cmp(len(a) - i, len(b) - j)


def directories_first(left: Entry, right: Entry) -> int:
    """Order directories before files and report a tie within each group.

    Args:
        left: First entry.
        right: Second entry.

    Returns:
        int: Negative when only ``left`` is a directory, positive when only
        ``right`` is, zero otherwise.
    """
    return _cmp(not left.is_directory, not right.is_directory)


def compare_name(left: Entry, right: Entry) -> int:
    """Compare names naturally, so ``file2`` sorts before ``file10``."""
    return natural_compare(left.name, right.name)


def compare_date(left: Entry, right: Entry) -> int:
    """Compare modification times, oldest first."""
    return _cmp(left.modified_at, right.modified_at)


def compare_size(left: Entry, right: Entry) -> int:
    """Compare byte sizes; directories carry a size of zero."""
    return _cmp(left.size, right.size)


def compare_type(left: Entry, right: Entry) -> int:
    """Compare type labels case-insensitively."""
    return _cmp(left.type_label.casefold(), right.type_label.casefold())


def compare_description(left: Entry, right: Entry) -> int:
    """Compare descriptions case-insensitively; a missing description sorts as empty."""
    return _cmp((left.description or "").casefold(), (right.description or "").casefold())


COMPARATORS: Mapping[str, Comparator] = {
    "name": compare_name,
    "date": compare_date,
    "size": compare_size,
    "type": compare_type,
    "description": compare_description,
}


def then(primary: Comparator, secondary: Comparator) -> Comparator:
    """Return a comparator consulting ``secondary`` only when ``primary`` ties."""

    def composed(left: Entry, right: Entry) -> int:
        return primary(left, right) or secondary(left, right)

    return composed


def reverse(comparator: Comparator) -> Comparator:
    """Return ``comparator`` with its result negated."""

    def reversed_(left: Entry, right: Entry) -> int:
        return -comparator(left, right)

    return reversed_


def normalize_sort_key(value: str | None) -> SortKey:
    """Coerce a raw sort column, falling back to ``name`` for unknown values."""
    key = (value or "").strip().lower()
    return key if key in COMPARATORS else DEFAULT_SORT_KEY  # type: ignore[return-value]


def normalize_direction(value: str | None) -> SortDirection:
    """Coerce a raw direction; anything but ``desc``/``descending`` is ascending."""
    return "desc" if (value or "").strip().lower() in _DESCENDING else DEFAULT_DIRECTION


def build_comparator(sort_key: str | None, direction: str | None) -> Comparator:
    """Compose the directories-first rule with the comparator for ``sort_key``."""
    column = COMPARATORS[normalize_sort_key(sort_key)]
    if normalize_direction(direction) == "desc":
        column = reverse(column)
    return then(directories_first, column)


def sort_entries(
    entries: Iterable[Entry], sort_key: str | None = None, direction: str | None = None
) -> List[Entry]:
    """Return ``entries`` ordered for display; ties keep their incoming order."""
    return sorted(entries, key=cmp_to_key(build_comparator(sort_key, direction)))


__all__ = [
    "COMPARATORS",
    "Comparator",
    "build_comparator",
    "compare_date",
    "compare_description",
    "compare_name",
    "compare_size",
    "compare_type",
    "directories_first",
    "natural_compare",
    "normalize_direction",
    "normalize_sort_key",
    "reverse",
    "sort_entries",
    "then",
]
