"""Extension classification package."""

from .engine import TypeClassifier, extension_of, format_size
from .models import Classification
from .table import EXTENSION_TABLE, ClassificationEntry

__all__ = [
    "Classification",
    "ClassificationEntry",
    "EXTENSION_TABLE",
    "TypeClassifier",
    "extension_of",
    "format_size",
]
