"""Classification result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Classification(BaseModel):
    """Visual and sortable classification of a listing entry.

    Attributes:
        type_label: Human-readable type, ``"Dir"`` for directories.
        icon: Icon identifier understood by the presentation layer.
        color: CSS color paired with the icon.
    """

    model_config = ConfigDict(frozen=True)

    type_label: str
    icon: str
    color: str


__all__ = ["Classification"]
