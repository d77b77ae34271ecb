"""Browse and mutation contracts for hosting runtimes."""

from .models import (
    AuthorizationContext,
    BrowseRequest,
    BrowseResult,
    MutationRequest,
    MutationResult,
)
from .service import (
    ERROR_ADMIN_REQUIRED,
    ERROR_INVALID_DESCRIPTION,
    ERROR_INVALID_DIRECTORY,
    ERROR_WRITE_FAILED,
    FileBrowser,
    sort_link,
)

__all__ = [
    "ERROR_ADMIN_REQUIRED",
    "ERROR_INVALID_DESCRIPTION",
    "ERROR_INVALID_DIRECTORY",
    "ERROR_WRITE_FAILED",
    "AuthorizationContext",
    "BrowseRequest",
    "BrowseResult",
    "FileBrowser",
    "MutationRequest",
    "MutationResult",
    "sort_link",
]
