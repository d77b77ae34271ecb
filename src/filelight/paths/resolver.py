"""Resolve root-relative request paths without letting them escape the root.

Confinement is checked against the physical path after symlinks, ``.`` and
``..`` have been resolved by the filesystem, so a symlink inside the root that
points elsewhere is rejected just like a textual ``../`` escape.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import List
from urllib.parse import quote

from pydantic import BaseModel

from .errors import ConfinementError

LOGGER = logging.getLogger(__name__)

_SEPARATORS = "/\\"


class Crumb(BaseModel):
    """One breadcrumb element.

    Attributes:
        name: Path segment shown to the user.
        path: Cumulative root-relative path up to and including ``name``.
    """

    name: str
    path: str


def canonicalize_root(root: str | Path) -> Path:
    """Return the canonical absolute form of ``root``.

    Args:
        root: Directory that browse requests are confined to.

    Returns:
        Path: Symlink-resolved absolute directory path.

    Raises:
        ConfinementError: If the root does not exist or is not a directory.
    """
    try:
        resolved = Path(root).expanduser().resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        raise ConfinementError(f"Browse root {root} cannot be resolved: {exc}") from exc
    if not resolved.is_dir():
        raise ConfinementError(f"Browse root {resolved} is not a directory")
    return resolved


def confine(root: Path, relative_path: str) -> Path:
    """Join ``relative_path`` onto ``root`` and verify it stays inside.

    Args:
        root: Previously canonicalized root directory.
        relative_path: Root-relative path supplied by a request.

    Returns:
        Path: Canonical absolute path equal to ``root`` or located below it.

    Raises:
        ConfinementError: If the path does not exist or resolves outside ``root``.
    """
    trimmed = relative_path.strip(_SEPARATORS)
    candidate = root / trimmed if trimmed else root
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        LOGGER.debug("Rejecting unresolvable path %r: %s", relative_path, exc)
        raise ConfinementError(f"Path {relative_path!r} cannot be resolved") from exc

    if not resolved.is_relative_to(root):
        LOGGER.info("Rejecting path %r that resolves outside the root", relative_path)
        raise ConfinementError(f"Path {relative_path!r} escapes the browse root")
    return resolved


class PathResolver:
    """Confine request paths to a root canonicalized once at construction."""

    def __init__(self, root: str | Path) -> None:
        self._root = canonicalize_root(root)

    @property
    def root(self) -> Path:
        """Return the canonical browse root."""
        return self._root

    def confine(self, relative_path: str = "") -> Path:
        """Return the confined absolute path for ``relative_path``."""
        return confine(self._root, relative_path)

    def relative(self, path: Path) -> str:
        """Return the root-relative POSIX form of a confined ``path``.

        Args:
            path: Path previously returned by :meth:`confine`.

        Returns:
            str: Relative path using ``/`` separators, empty for the root itself.
        """
        if path == self._root:
            return ""
        return path.relative_to(self._root).as_posix()


def build_breadcrumb(relative_path: str) -> List[Crumb]:
    """Pair each segment of ``relative_path`` with its cumulative path."""
    crumbs: List[Crumb] = []
    current = PurePosixPath()
    for segment in relative_path.replace("\\", "/").split("/"):
        if not segment:
            continue
        current = current / segment
        crumbs.append(Crumb(name=segment, path=current.as_posix()))
    return crumbs


def build_link_path(relative_path: str, name: str) -> str:
    """Return the URL-encoded relative link for ``name`` inside ``relative_path``."""
    segments = [segment for segment in relative_path.split("/") if segment]
    segments.append(name)
    return "/".join(quote(segment, safe="") for segment in segments)


__all__ = [
    "Crumb",
    "PathResolver",
    "build_breadcrumb",
    "build_link_path",
    "canonicalize_root",
    "confine",
]
