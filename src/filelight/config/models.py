"""Configuration models describing FileLight settings."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SIDECAR_NAME = "DESCRIPT.ION"
DEFAULT_HIDDEN_NAMES = [".htaccess", DEFAULT_SIDECAR_NAME, "_h5ai", "desc.js", "index.php"]


class FileLightBaseModel(BaseModel):
    """Shared configuration for FileLight Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class BrowserSettings(FileLightBaseModel):
    """Settings that govern browsing and description storage.

    Attributes:
        root: Directory every browse and mutation request is confined to.
        sidecar_name: Filename of the per-directory description file.
        hidden_names: Entry names that never appear in listings.
        default_sort: Sort column applied when a request does not name one.
        default_order: Sort direction applied when a request does not name one.
    """

    root: str = "."
    sidecar_name: str = DEFAULT_SIDECAR_NAME
    hidden_names: List[str] = Field(default_factory=lambda: list(DEFAULT_HIDDEN_NAMES))
    default_sort: Literal["name", "date", "size", "type", "description"] = "name"
    default_order: Literal["asc", "desc"] = "asc"

    @field_validator("sidecar_name")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("sidecar_name must be a plain filename")
        return value


class LoggingSettings(FileLightBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(FileLightBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class FileLightConfig(FileLightBaseModel):
    """Top-level configuration struct for FileLight.

    Attributes:
        browser: Browsing and sidecar settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DEFAULT_HIDDEN_NAMES",
    "DEFAULT_SIDECAR_NAME",
    "FileLightBaseModel",
    "BrowserSettings",
    "LoggingSettings",
    "CLIOptions",
    "FileLightConfig",
]
