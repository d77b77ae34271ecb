"""Filename to description mapping backed by a sidecar file."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, Tuple

from .errors import MetadataError

_LINE_BREAKS = ("\n", "\r")
_COMMENT_MARK = "#"


def _check_single_line(value: str, field: str) -> None:
    if any(mark in value for mark in _LINE_BREAKS):
        raise MetadataError(f"{field} must not contain line breaks")


class MetadataMap(MutableMapping[str, str]):
    """Ordered mapping of filenames to non-empty descriptions.

    Keys keep the order in which they were first seen; overwriting a key keeps
    its position and new keys are appended. Assigning an empty or
    whitespace-only description removes the key instead of storing it.
    """

    def __init__(self, items: Iterable[Tuple[str, str]] = ()) -> None:
        self._data: Dict[str, str] = {}
        for filename, description in items:
            self.set(filename, description)

    def set(self, filename: str, description: str) -> None:
        """Store ``description`` for ``filename``, or remove it when blank.

        Raises:
            MetadataError: If the filename is empty, starts with ``#``, has
                surrounding whitespace, or either value spans lines.
        """
        if not filename:
            raise MetadataError("filename must not be empty")
        if filename.startswith(_COMMENT_MARK):
            raise MetadataError("filename must not start with '#'")
        if filename != filename.strip():
            raise MetadataError("filename must not start or end with whitespace")
        _check_single_line(filename, "filename")
        _check_single_line(description, "description")
        cleaned = description.strip()
        if cleaned:
            self._data[filename] = cleaned
        else:
            self._data.pop(filename, None)

    def remove(self, filename: str) -> None:
        """Drop ``filename`` if present."""
        self._data.pop(filename, None)

    def __getitem__(self, filename: str) -> str:
        return self._data[filename]

    def __setitem__(self, filename: str, description: str) -> None:
        self.set(filename, description)

    def __delitem__(self, filename: str) -> None:
        del self._data[filename]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


__all__ = ["MetadataMap"]
