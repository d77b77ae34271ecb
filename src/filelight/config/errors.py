"""Errors raised while loading or validating FileLight configuration."""

from __future__ import annotations

from typing import List, Sequence


class ConfigError(Exception):
    """Raised when configuration data cannot be read, merged, or validated."""


class ConfigValidationError(ConfigError):
    """Raised when merged configuration values are rejected by the settings models.

    Attributes:
        issues: One ``dotted.path: message`` string per rejected field.
    """

    def __init__(self, issues: Sequence[str]) -> None:
        self.issues: List[str] = list(issues)
        super().__init__("Invalid configuration values: " + "; ".join(self.issues))


__all__ = ["ConfigError", "ConfigValidationError"]
