"""Sidecar description storage for FileLight."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from filelight.config.models import DEFAULT_SIDECAR_NAME

from .errors import MetadataError, MetadataWriteError
from .grammar import check_storable, parse, serialize
from .locking import sidecar_lock
from .models import MetadataMap

LOGGER = logging.getLogger(__name__)

_DEFAULT_FILE_MODE = 0o644


class MetadataStore:
    """Read and write per-directory description sidecar files."""

    def __init__(self, root: Path, sidecar_name: str = DEFAULT_SIDECAR_NAME) -> None:
        """Initialize the store.

        Args:
            root: Canonical browse root whose sidecar acts as the read fallback.
            sidecar_name: Filename of the sidecar inside each directory.
        """
        self._root = root
        self._sidecar_name = sidecar_name

    @property
    def sidecar_name(self) -> str:
        """Return the sidecar filename.

        Returns:
            str: Name of the per-directory description file.
        """
        return self._sidecar_name

    def sidecar_path(self, directory: Path) -> Path:
        """Return the sidecar location for ``directory``."""
        return directory / self._sidecar_name

    def load(self, directory: Path) -> MetadataMap:
        """Load descriptions that apply to ``directory``.

        The directory's own sidecar wins; without one the root sidecar is used
        as is, and without either the map is empty. Files are never merged.

        Args:
            directory: Confined directory being listed.

        Returns:
            MetadataMap: Descriptions keyed by filename.
        """
        for candidate in (self.sidecar_path(directory), self.sidecar_path(self._root)):
            text = self._read(candidate)
            if text is not None:
                return parse(text)
        return MetadataMap()

    def load_local(self, directory: Path) -> MetadataMap:
        """Load only the sidecar stored in ``directory``, without the root fallback."""
        text = self._read(self.sidecar_path(directory))
        return parse(text) if text is not None else MetadataMap()

    def save(self, directory: Path, metadata: MetadataMap) -> None:
        """Atomically replace the sidecar in ``directory`` with ``metadata``.

        Args:
            directory: Confined directory that owns the sidecar.
            metadata: Descriptions to persist.

        Raises:
            MetadataWriteError: If the file cannot be written; the previous
                sidecar, if any, is left untouched.
        """
        target = self.sidecar_path(directory)
        payload = serialize(metadata)
        try:
            mode = target.stat().st_mode & 0o777
        except OSError:
            mode = _DEFAULT_FILE_MODE

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._sidecar_name}.", suffix=".tmp"
            )
            with os.fdopen(
                fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
            ) as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise MetadataWriteError(f"Could not write {target}: {exc}") from exc

        LOGGER.info("Wrote %d description(s) to %s", len(metadata), target)

    def update(self, directory: Path, filename: str, description: str) -> MetadataMap:
        """Set or clear one description in the sidecar local to ``directory``.

        The load, change, and save happen under an exclusive lock for the
        directory so concurrent updates are applied one after the other. The
        existing file is read strictly: if it exists but cannot be read the
        update is refused rather than replacing it with a single entry.
        Bytes that are not valid UTF-8 are carried through unchanged.

        Args:
            directory: Confined directory that owns the sidecar.
            filename: Entry whose description changes.
            description: New description; blank removes the entry.

        Returns:
            MetadataMap: The map as written to disk.

        Raises:
            MetadataError: If the filename or description is not storable.
            MetadataWriteError: If the existing sidecar cannot be read, or the
                lock or the write fails.
        """
        check_storable(filename, description)
        try:
            with sidecar_lock(directory):
                metadata = self._load_for_update(directory)
                metadata.set(filename, description)
                self.save(directory, metadata)
        except MetadataError:
            raise
        except OSError as exc:
            raise MetadataWriteError(f"Could not lock {directory}: {exc}") from exc
        return metadata

    def _load_for_update(self, directory: Path) -> MetadataMap:
        path = self.sidecar_path(directory)
        try:
            text = path.read_text(encoding="utf-8-sig", errors="surrogateescape")
        except FileNotFoundError:
            return MetadataMap()
        except OSError as exc:
            raise MetadataWriteError(f"Could not read {path}: {exc}") from exc
        return parse(text)

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8-sig", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as exc:
            LOGGER.warning("Ignoring unreadable sidecar %s: %s", path, exc)
            return None


__all__ = [
    "MetadataStore",
    "MetadataMap",
    "MetadataError",
    "MetadataWriteError",
    "parse",
    "serialize",
]
