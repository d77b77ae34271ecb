"""Browse and description-update operations over a confined root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from filelight.classification import TypeClassifier
from filelight.config.models import BrowserSettings
from filelight.listing import (
    DirectoryLister,
    DirectoryScanner,
    normalize_direction,
    normalize_sort_key,
)
from filelight.metadata import MetadataError, MetadataStore, MetadataWriteError
from filelight.paths import ConfinementError, PathResolver, build_breadcrumb

from .models import (
    AuthorizationContext,
    BrowseRequest,
    BrowseResult,
    MutationRequest,
    MutationResult,
)

LOGGER = logging.getLogger(__name__)

ERROR_ADMIN_REQUIRED = "Admin access required"
ERROR_INVALID_DIRECTORY = "Invalid directory"
ERROR_INVALID_DESCRIPTION = "Invalid description"
ERROR_WRITE_FAILED = "Could not write metadata"


class FileBrowser:
    """Serve listings and description edits for one browse root."""

    def __init__(
        self,
        settings: BrowserSettings,
        *,
        root: str | Path | None = None,
        classifier: TypeClassifier | None = None,
    ) -> None:
        """Initialize the browser.

        Args:
            settings: Browser configuration.
            root: Optional root overriding ``settings.root``.
            classifier: Optional classifier replacing the default table.

        Raises:
            ConfinementError: If the root cannot be resolved to a directory.
        """
        self.settings = settings
        self.resolver = PathResolver(root if root is not None else settings.root)
        self.store = MetadataStore(self.resolver.root, settings.sidecar_name)
        hidden = {*settings.hidden_names, settings.sidecar_name}
        self.lister = DirectoryLister(
            DirectoryScanner(hidden_names=hidden), classifier or TypeClassifier()
        )

    @property
    def root(self) -> Path:
        """Return the canonical browse root."""
        return self.resolver.root

    def browse(self, request: BrowseRequest) -> BrowseResult:
        """List the requested directory.

        Args:
            request: Directory, search, and sort parameters.

        Returns:
            BrowseResult: Breadcrumb and ordered entries.

        Raises:
            ConfinementError: If the directory escapes the root, does not
                exist, or is not a directory.
        """
        directory = self.resolver.confine(request.directory)
        if not directory.is_dir():
            raise ConfinementError(f"Path {request.directory!r} is not a directory")

        relative = self.resolver.relative(directory)
        sort = normalize_sort_key(request.sort or self.settings.default_sort)
        order = normalize_direction(request.order or self.settings.default_order)
        metadata = self.store.load(directory)
        entries = self.lister.list(
            directory,
            metadata=metadata,
            query=request.query,
            sort_key=sort,
            direction=order,
            base_relative=relative,
        )
        return BrowseResult(
            directory=relative,
            breadcrumb=build_breadcrumb(relative),
            entries=entries,
            query=request.query,
            sort=sort,
            order=order,
        )

    def update_description(
        self, request: MutationRequest, auth: AuthorizationContext
    ) -> MutationResult:
        """Set or clear the description of one entry.

        Args:
            request: Target directory, filename, and new description.
            auth: Privileges of the caller, established outside this service.

        Returns:
            MutationResult: Success, or a failure carrying a display message.
        """
        if not auth.is_admin:
            return MutationResult(success=False, error=ERROR_ADMIN_REQUIRED)

        try:
            directory = self.resolver.confine(request.directory)
        except ConfinementError:
            return MutationResult(success=False, error=ERROR_INVALID_DIRECTORY)
        if not directory.is_dir():
            return MutationResult(success=False, error=ERROR_INVALID_DIRECTORY)

        try:
            self.store.update(directory, request.filename, request.description)
        except MetadataWriteError as exc:
            LOGGER.error("Description update failed: %s", exc)
            return MutationResult(success=False, error=ERROR_WRITE_FAILED)
        except MetadataError as exc:
            LOGGER.info("Rejected description for %r: %s", request.filename, exc)
            return MutationResult(success=False, error=ERROR_INVALID_DESCRIPTION)

        return MutationResult(success=True)


def sort_link(column: str, result: BrowseResult) -> Dict[str, str]:
    """Return query parameters for a column header link.

    Clicking the active ascending column switches it to descending; any other
    click sorts ascending.
    """
    order = "desc" if result.sort == column and result.order == "asc" else "asc"
    params: Dict[str, str] = {}
    if result.directory:
        params["dir"] = result.directory
    if result.query:
        params["q"] = result.query
    params["sort"] = column
    params["order"] = order
    return params


__all__ = [
    "ERROR_ADMIN_REQUIRED",
    "ERROR_INVALID_DESCRIPTION",
    "ERROR_INVALID_DIRECTORY",
    "ERROR_WRITE_FAILED",
    "FileBrowser",
    "sort_link",
]
