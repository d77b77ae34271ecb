"""Extension-based classification of listing entries.

The classifier is a pure lookup: it never touches the filesystem, so callers
decide whether a name denotes a directory.
"""

from __future__ import annotations

from typing import Mapping

from .models import Classification
from .table import (
    DIRECTORY_LABEL,
    EXTENSION_TABLE,
    FOLDER_COLOR,
    FOLDER_ICON,
    GENERIC_COLOR,
    GENERIC_ICON,
    IMAGE_EXTENSIONS,
    ClassificationEntry,
)

_KB = 1024
_MB = 1024**2
_GB = 1024**3


def extension_of(name: str) -> str:
    """Return the lowercase text after the last dot of ``name``, or an empty string."""
    head, dot, tail = name.rpartition(".")
    if not dot:
        return ""
    return tail.lower()


class TypeClassifier:
    """Map filenames to a type label, icon, and color."""

    def __init__(self, table: Mapping[str, ClassificationEntry] | None = None) -> None:
        self._table = EXTENSION_TABLE if table is None else table
        self._directory = Classification(
            type_label=DIRECTORY_LABEL, icon=FOLDER_ICON, color=FOLDER_COLOR
        )

    def classify(self, name: str, is_directory: bool = False) -> Classification:
        """Classify ``name``.

        Args:
            name: Entry name as it appears in the directory.
            is_directory: Whether the entry is a directory.

        Returns:
            Classification: Label, icon, and color for the entry. Unknown
            extensions are labelled with the uppercased extension; names without
            an extension get an empty label.
        """
        if is_directory:
            return self._directory

        extension = extension_of(name)
        row = self._table.get(extension)
        if row is not None:
            return Classification(type_label=row.label, icon=row.icon, color=row.color)
        return Classification(type_label=extension.upper(), icon=GENERIC_ICON, color=GENERIC_COLOR)

    def type_label(self, name: str, is_directory: bool = False) -> str:
        """Return only the type label for ``name``."""
        return self.classify(name, is_directory).type_label

    def is_image(self, name: str) -> bool:
        """Return whether ``name`` carries a previewable image extension."""
        return extension_of(name) in IMAGE_EXTENSIONS


def format_size(num_bytes: int) -> str:
    """Render a byte count with one decimal in KB, MB, or GB."""
    if num_bytes < _KB:
        return f"{num_bytes} B"
    if num_bytes < _MB:
        return f"{num_bytes / _KB:,.1f} KB"
    if num_bytes < _GB:
        return f"{num_bytes / _MB:,.1f} MB"
    return f"{num_bytes / _GB:,.1f} GB"


__all__ = ["TypeClassifier", "extension_of", "format_size"]
