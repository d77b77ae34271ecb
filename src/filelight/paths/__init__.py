"""Path confinement helpers for FileLight."""

from .errors import ConfinementError
from .resolver import (
    Crumb,
    PathResolver,
    build_breadcrumb,
    build_link_path,
    canonicalize_root,
    confine,
)

__all__ = [
    "ConfinementError",
    "Crumb",
    "PathResolver",
    "build_breadcrumb",
    "build_link_path",
    "canonicalize_root",
    "confine",
]
