"""Parse and serialize the line-oriented DESCRIPT.ION format.

Each meaningful line holds a filename and its description::

    # comment
    readme.txt                    Project notes
    archive-with-a-really-long-name.zip<TAB>Backup file

Filenames may contain runs of spaces, so a line is first matched against a
filename ending in a known extension; only when that fails is it split on the
first run of two or more whitespace characters (or a tab).
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional, Tuple

from .errors import MetadataError
from .models import MetadataMap

LOGGER = logging.getLogger(__name__)

KNOWN_EXTENSIONS = (
    "jpg", "jpeg", "png", "gif", "bmp", "webp", "pdf", "doc", "docx", "txt",
    "mp3", "mp4", "avi", "zip", "rar", "php", "js", "css", "html", "swf",
    "exe", "com", "bat", "cmd", "svg", "ico", "flac", "wav", "mov", "mkv",
    "7z", "tar", "gz", "xml", "json", "sql", "log", "md",
)  # fmt: skip

COLUMN_WIDTH = 30
TAB_THRESHOLD = 28

# Lazy so that a known extension inside the description is never taken as
# part of the filename.
_EXTENSION_LINE = re.compile(
    r"^(.+?\.(?:" + "|".join(re.escape(ext) for ext in KNOWN_EXTENSIONS) + r"))\s+(.+)$",
    re.IGNORECASE,
)
_FIELD_SEPARATOR = re.compile(r"\s{2,}|\t")


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Return the ``(filename, description)`` pair held by ``line``.

    Returns:
        Optional[Tuple[str, str]]: The pair, or ``None`` for blank lines,
        comments, and lines without a two-field split.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    match = _EXTENSION_LINE.match(stripped)
    if match:
        filename, description = match.group(1).strip(), match.group(2).strip()
    else:
        parts = _FIELD_SEPARATOR.split(stripped, maxsplit=1)
        if len(parts) != 2:
            LOGGER.debug("Skipping sidecar line without a field separator: %r", stripped)
            return None
        filename, description = parts[0].strip(), parts[1].strip()

    if not filename or not description:
        return None
    return filename, description


def parse(text: str) -> MetadataMap:
    """Parse sidecar ``text`` into a map; later lines override earlier ones."""
    metadata = MetadataMap()
    for line in text.splitlines():
        pair = parse_line(line)
        if pair is not None:
            metadata.set(*pair)
    return metadata


def format_line(filename: str, description: str) -> str:
    """Lay out one sidecar line, without the trailing newline."""
    if len(filename) > TAB_THRESHOLD:
        return f"{filename}\t{description}"
    return f"{filename.ljust(COLUMN_WIDTH)}{description}"


def check_storable(filename: str, description: str) -> None:
    """Raise unless the pair survives being written as a line and parsed back.

    A filename such as ``notes.txt copy.txt`` is refused here: the parser would
    end the name at the first known extension followed by whitespace.

    Raises:
        MetadataError: If either value is rejected by :class:`MetadataMap`, or
            the formatted line would parse to a different pair.
    """
    cleaned = MetadataMap([(filename, description)]).get(filename)
    if cleaned is None:
        return
    if parse_line(format_line(filename, cleaned)) != (filename, cleaned):
        raise MetadataError(f"{filename!r} cannot be stored as a sidecar line")


def serialize(metadata: Mapping[str, str]) -> str:
    """Render ``metadata`` in sidecar format, skipping empty descriptions."""
    return "".join(
        format_line(filename, description) + "\n"
        for filename, description in metadata.items()
        if description
    )


__all__ = [
    "COLUMN_WIDTH",
    "KNOWN_EXTENSIONS",
    "TAB_THRESHOLD",
    "check_storable",
    "format_line",
    "parse",
    "parse_line",
    "serialize",
]
