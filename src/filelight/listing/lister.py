"""Listing pipeline: scan, hide, search, classify, and sort one directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Mapping

from filelight.classification import TypeClassifier, format_size
from filelight.paths import build_link_path

from .discovery import DirectoryScanner
from .models import Entry, ScannedEntry
from .search import filter_entries
from .sorting import sort_entries

LOGGER = logging.getLogger(__name__)


class DirectoryLister:
    """Produce the ordered entries shown for a confined directory."""

    def __init__(self, scanner: DirectoryScanner, classifier: TypeClassifier) -> None:
        self.scanner = scanner
        self.classifier = classifier

    def list(
        self,
        directory: Path,
        *,
        metadata: Mapping[str, str],
        hidden_names: Iterable[str] | None = None,
        query: str | None = None,
        sort_key: str | None = None,
        direction: str | None = None,
        base_relative: str = "",
    ) -> List[Entry]:
        """List ``directory`` for display.

        Args:
            directory: Directory already confined to the browse root.
            metadata: Descriptions applicable to the directory.
            hidden_names: Replacement for the scanner's hidden-name set.
            query: Case-insensitive text matched against names and descriptions.
            sort_key: Column to sort by; unknown values sort by name.
            direction: ``asc`` (default) or ``desc``.
            base_relative: Root-relative path of ``directory`` used for links.

        Returns:
            List[Entry]: Directories first, then files, each group ordered by
            ``sort_key``.
        """
        entries = [
            self._build_entry(scanned, metadata, base_relative)
            for scanned in self.scanner.scan(directory, hidden_names=hidden_names)
        ]
        matched = filter_entries(entries, query)
        LOGGER.debug(
            "Listed %s: %d entries, %d after search %r",
            directory,
            len(entries),
            len(matched),
            query,
        )
        return sort_entries(matched, sort_key, direction)

    def _build_entry(
        self, scanned: ScannedEntry, metadata: Mapping[str, str], base_relative: str
    ) -> Entry:
        classification = self.classifier.classify(scanned.name, scanned.is_directory)
        return Entry(
            name=scanned.name,
            is_directory=scanned.is_directory,
            size=scanned.size,
            modified_at=scanned.modified_at,
            type_label=classification.type_label,
            icon=classification.icon,
            color=classification.color,
            description=metadata.get(scanned.name),
            link_path=build_link_path(base_relative, scanned.name),
            display_size="" if scanned.is_directory else format_size(scanned.size),
            is_image=not scanned.is_directory and self.classifier.is_image(scanned.name),
        )


__all__ = ["DirectoryLister"]
