"""Listing data models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel

SortKey = Literal["name", "date", "size", "type", "description"]
SortDirection = Literal["asc", "desc"]


class ScannedEntry(BaseModel):
    """Raw directory entry discovered by the scanner.

    Attributes:
        name: Entry name within its directory.
        path: Absolute path of the entry.
        is_directory: Whether the entry is (or links to) a directory.
        size: Size in bytes; zero for directories.
        modified_at: Last modification time in UTC.
    """

    name: str
    path: Path
    is_directory: bool
    size: int = 0
    modified_at: datetime


class Entry(BaseModel):
    """Listing row handed to the presentation layer.

    Attributes:
        name: Entry name, unique within the directory.
        is_directory: Whether the entry is a directory.
        size: Size in bytes; zero for directories.
        modified_at: Last modification time in UTC.
        type_label: Classified type, ``"Dir"`` for directories.
        icon: Icon identifier for the entry.
        color: Color paired with the icon.
        description: Sidecar description, if any.
        link_path: URL-encoded root-relative path of the entry.
        display_size: Human-readable size; empty for directories.
        is_image: Whether the entry can be previewed as an image.
    """

    name: str
    is_directory: bool
    size: int = 0
    modified_at: datetime
    type_label: str = ""
    icon: str = ""
    color: str = ""
    description: Optional[str] = None
    link_path: str = ""
    display_size: str = ""
    is_image: bool = False


__all__ = ["Entry", "ScannedEntry", "SortDirection", "SortKey"]
