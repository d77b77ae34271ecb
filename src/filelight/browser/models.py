"""Request and response models for the browse and mutation contracts."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from filelight.listing.models import Entry, SortDirection, SortKey
from filelight.paths import Crumb


class BrowseRequest(BaseModel):
    """Listing query issued by a presentation layer.

    Attributes:
        directory: Root-relative directory; empty means the root.
        query: Optional case-insensitive search text.
        sort: Raw sort column; unknown values sort by name.
        order: Raw sort direction; anything but ``desc`` is ascending.
    """

    directory: str = ""
    query: str = ""
    sort: Optional[str] = None
    order: Optional[str] = None


class BrowseResult(BaseModel):
    """Ordered listing for one directory."""

    directory: str
    breadcrumb: List[Crumb] = Field(default_factory=list)
    entries: List[Entry] = Field(default_factory=list)
    query: str = ""
    sort: SortKey = "name"
    order: SortDirection = "asc"


class AuthorizationContext(BaseModel):
    """Caller privileges established by the hosting runtime.

    Attributes:
        is_admin: Whether the caller may edit descriptions.
    """

    is_admin: bool = False


class MutationRequest(BaseModel):
    """Description change for one entry."""

    directory: str = ""
    filename: str
    description: str = ""


class MutationResult(BaseModel):
    """Outcome of a description change.

    Attributes:
        success: Whether the sidecar was rewritten.
        error: Message for the caller when ``success`` is false.
    """

    success: bool
    error: Optional[str] = None


__all__ = [
    "AuthorizationContext",
    "BrowseRequest",
    "BrowseResult",
    "MutationRequest",
    "MutationResult",
]
