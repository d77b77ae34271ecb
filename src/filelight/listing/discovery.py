"""Directory enumeration utilities."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

from .models import ScannedEntry

LOGGER = logging.getLogger(__name__)


class DirectoryScanner:
    """Enumerate a single directory level, skipping hidden control files."""

    def __init__(self, *, hidden_names: Iterable[str] = ()) -> None:
        self.hidden_names = frozenset(hidden_names)

    def scan(
        self, directory: Path, *, hidden_names: Iterable[str] | None = None
    ) -> Iterator[ScannedEntry]:
        """Yield entries of ``directory`` in ascending name order.

        Args:
            directory: Confined directory to enumerate.
            hidden_names: Replacement for the scanner's hidden-name set.

        Yields:
            ScannedEntry: One entry per visible name. Entries that disappear
            while scanning are skipped.
        """
        hidden = self.hidden_names if hidden_names is None else frozenset(hidden_names)
        for path in sorted(directory.iterdir(), key=lambda item: item.name):
            if path.name in hidden:
                continue
            try:
                stat = path.stat()
            except OSError:
                try:
                    stat = path.lstat()
                except OSError as exc:
                    LOGGER.debug("Skipping %s: %s", path, exc)
                    continue

            is_directory = path.is_dir()
            yield ScannedEntry(
                name=path.name,
                path=path,
                is_directory=is_directory,
                size=0 if is_directory else stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )


__all__ = ["DirectoryScanner"]
