"""Static extension table used to label and decorate listing entries."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple


class ClassificationEntry(NamedTuple):
    """Immutable table row describing one extension."""

    label: str
    icon: str
    color: str


GENERIC_ICON = "file-earmark"
GENERIC_COLOR = "#7F8C8D"
FOLDER_ICON = "folder"
FOLDER_COLOR = "#5DADE2"
DIRECTORY_LABEL = "Dir"

_PDF = ClassificationEntry("PDF", "file-earmark-pdf", "#E74C3C")
_WORD = ClassificationEntry("Document", "file-earmark-word", "#2E86C1")
_EXCEL = ClassificationEntry("Spreadsheet", "file-earmark-excel", "#27AE60")
_SLIDES = ClassificationEntry("Presentation", "file-earmark-ppt", "#E67E22")
_TEXT = ClassificationEntry("Text", "file-earmark-text", "#95A5A6")
_IMAGE = ClassificationEntry("Image", "file-earmark-image", "#E74C3C")
_MUSIC = ClassificationEntry("Music", "file-earmark-music", "#9B59B6")
_VIDEO = ClassificationEntry("Video", "file-earmark-play", "#F39C12")
_ARCHIVE = ClassificationEntry("Archive", "file-earmark-zip", "#34495E")

EXTENSION_TABLE: Mapping[str, ClassificationEntry] = MappingProxyType(
    {
        "pdf": _PDF,
        "doc": _WORD,
        "docx": _WORD,
        "xls": _EXCEL,
        "xlsx": _EXCEL,
        "ppt": _SLIDES,
        "pptx": _SLIDES,
        "txt": _TEXT,
        "md": _TEXT,
        "jpg": _IMAGE,
        "jpeg": _IMAGE,
        "png": _IMAGE,
        "gif": _IMAGE,
        "webp": _IMAGE,
        "mp3": _MUSIC,
        "wav": _MUSIC,
        "flac": _MUSIC,
        "aac": ClassificationEntry("Music", GENERIC_ICON, GENERIC_COLOR),
        "mp4": _VIDEO,
        "avi": _VIDEO,
        "mkv": _VIDEO,
        "mov": _VIDEO,
        "zip": _ARCHIVE,
        "rar": _ARCHIVE,
        "7z": _ARCHIVE,
        "tar": ClassificationEntry("Archive", GENERIC_ICON, GENERIC_COLOR),
        "js": ClassificationEntry("Code", "file-earmark-code", "#F1C40F"),
        "css": ClassificationEntry("Code", "file-earmark-code", "#3498DB"),
        "html": ClassificationEntry("Code", "file-earmark-code", "#E67E22"),
        "php": ClassificationEntry("Code", "file-earmark-code", "#8E44AD"),
        "py": ClassificationEntry("Code", "file-earmark-code", "#3498DB"),
    }
)

# Extensions rendered with an inline preview by image-capable front ends.
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "bmp", "svg"})


__all__ = [
    "ClassificationEntry",
    "EXTENSION_TABLE",
    "IMAGE_EXTENSIONS",
    "DIRECTORY_LABEL",
    "FOLDER_ICON",
    "FOLDER_COLOR",
    "GENERIC_ICON",
    "GENERIC_COLOR",
]
