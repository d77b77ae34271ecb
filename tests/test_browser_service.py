"""Tests for the browse and description-update service."""

from __future__ import annotations

from pathlib import Path

import pytest

from filelight.browser import (
    ERROR_ADMIN_REQUIRED,
    ERROR_INVALID_DESCRIPTION,
    ERROR_INVALID_DIRECTORY,
    ERROR_WRITE_FAILED,
    AuthorizationContext,
    BrowseRequest,
    FileBrowser,
    MutationRequest,
    sort_link,
)
from filelight.config.models import BrowserSettings
from filelight.paths import ConfinementError

ADMIN = AuthorizationContext(is_admin=True)


def _browser(tmp_path: Path, **settings: object) -> FileBrowser:
    """Return a browser over a small tree.

    Args:
        tmp_path: Temporary directory provided by pytest.
        **settings: Overrides forwarded to ``BrowserSettings``.

    Returns:
        FileBrowser: Browser rooted at ``tmp_path / "root"``.
    """
    root = tmp_path / "root"
    (root / "docs" / "nested").mkdir(parents=True)
    (root / "docs" / "report.pdf").write_bytes(b"%PDF" * 100)
    (root / "readme.txt").write_text("hello", encoding="utf-8")
    (root / "index.php").write_text("<?php", encoding="utf-8")
    return FileBrowser(BrowserSettings(**settings), root=root)


def test_browse_root_lists_visible_entries(tmp_path: Path) -> None:
    browser = _browser(tmp_path)

    result = browser.browse(BrowseRequest())

    assert result.directory == ""
    assert result.breadcrumb == []
    assert [entry.name for entry in result.entries] == ["docs", "readme.txt"]
    assert result.sort == "name"
    assert result.order == "asc"


def test_browse_subdirectory_builds_breadcrumb_and_links(tmp_path: Path) -> None:
    browser = _browser(tmp_path)

    result = browser.browse(BrowseRequest(directory="/docs/"))

    assert result.directory == "docs"
    assert [(crumb.name, crumb.path) for crumb in result.breadcrumb] == [("docs", "docs")]
    assert [entry.link_path for entry in result.entries] == ["docs/nested", "docs/report.pdf"]
    assert result.entries[1].type_label == "PDF"


@pytest.mark.parametrize("directory", ["..", "../..", "docs/../../..", "missing"])
def test_browse_outside_root_is_forbidden(tmp_path: Path, directory: str) -> None:
    browser = _browser(tmp_path)

    with pytest.raises(ConfinementError):
        browser.browse(BrowseRequest(directory=directory))


def test_browse_file_is_rejected(tmp_path: Path) -> None:
    browser = _browser(tmp_path)

    with pytest.raises(ConfinementError):
        browser.browse(BrowseRequest(directory="readme.txt"))


def test_browse_uses_configured_defaults(tmp_path: Path) -> None:
    browser = _browser(tmp_path, default_sort="size", default_order="desc")

    result = browser.browse(BrowseRequest(sort="bogus", order=None))

    assert result.sort == "name"
    assert result.order == "desc"
    assert [entry.name for entry in result.entries] == ["docs", "readme.txt"]


def test_browse_attaches_descriptions_and_filters(tmp_path: Path) -> None:
    browser = _browser(tmp_path)
    browser.update_description(
        MutationRequest(filename="readme.txt", description="Start here"), ADMIN
    )

    result = browser.browse(BrowseRequest(query="start"))

    assert [entry.name for entry in result.entries] == ["readme.txt"]
    assert result.entries[0].description == "Start here"
    assert result.query == "start"


def test_subdirectory_inherits_root_descriptions(tmp_path: Path) -> None:
    browser = _browser(tmp_path)
    browser.update_description(
        MutationRequest(filename="report.pdf", description="Shared"), ADMIN
    )

    result = browser.browse(BrowseRequest(directory="docs"))

    report = next(entry for entry in result.entries if entry.name == "report.pdf")
    assert report.description == "Shared"


def test_custom_sidecar_name_is_hidden(tmp_path: Path) -> None:
    browser = _browser(tmp_path, sidecar_name="notes.txt")

    result = browser.update_description(
        MutationRequest(directory="docs", filename="report.pdf", description="Q3"), ADMIN
    )

    assert result.success is True
    assert (browser.root / "docs" / "notes.txt").exists()
    names = [entry.name for entry in browser.browse(BrowseRequest(directory="docs")).entries]
    assert names == ["nested", "report.pdf"]


def test_update_requires_admin(tmp_path: Path) -> None:
    browser = _browser(tmp_path)

    result = browser.update_description(
        MutationRequest(filename="readme.txt", description="x"), AuthorizationContext()
    )

    assert result.success is False
    assert result.error == ERROR_ADMIN_REQUIRED
    assert not (browser.root / "DESCRIPT.ION").exists()


@pytest.mark.parametrize("directory", ["..", "missing", "readme.txt"])
def test_update_rejects_invalid_directory(tmp_path: Path, directory: str) -> None:
    browser = _browser(tmp_path)

    result = browser.update_description(
        MutationRequest(directory=directory, filename="a.txt", description="x"), ADMIN
    )

    assert result.success is False
    assert result.error == ERROR_INVALID_DIRECTORY


def test_update_rejects_multiline_description(tmp_path: Path) -> None:
    browser = _browser(tmp_path)

    result = browser.update_description(
        MutationRequest(filename="readme.txt", description="one\ntwo"), ADMIN
    )

    assert result.success is False
    assert result.error == ERROR_INVALID_DESCRIPTION


def test_update_reports_write_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    browser = _browser(tmp_path)

    def _fail_replace(src: str, dst: str) -> None:
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr("filelight.metadata.os.replace", _fail_replace)

    result = browser.update_description(
        MutationRequest(filename="readme.txt", description="x"), ADMIN
    )

    assert result.success is False
    assert result.error == ERROR_WRITE_FAILED


def test_update_then_clear_description(tmp_path: Path) -> None:
    browser = _browser(tmp_path)
    browser.update_description(MutationRequest(filename="readme.txt", description="x"), ADMIN)

    result = browser.update_description(MutationRequest(filename="readme.txt"), ADMIN)

    assert result.success is True
    assert browser.browse(BrowseRequest()).entries[1].description is None


def test_sort_link_toggles_active_column(tmp_path: Path) -> None:
    browser = _browser(tmp_path)
    result = browser.browse(BrowseRequest(directory="docs", query="rep"))

    assert sort_link("name", result) == {
        "dir": "docs",
        "q": "rep",
        "sort": "name",
        "order": "desc",
    }
    assert sort_link("size", result)["order"] == "asc"

    descending = browser.browse(BrowseRequest(sort="name", order="desc"))
    assert sort_link("name", descending) == {"sort": "name", "order": "asc"}


@pytest.mark.parametrize("filename", ["#1 hit.mp3", " padded.txt", "notes.txt copy.txt"])
def test_update_rejects_filenames_that_would_be_lost(tmp_path: Path, filename: str) -> None:
    browser = _browser(tmp_path)

    result = browser.update_description(
        MutationRequest(filename=filename, description="kept?"), ADMIN
    )

    assert result.success is False
    assert result.error == ERROR_INVALID_DESCRIPTION
    assert not (browser.root / "DESCRIPT.ION").exists()


def test_update_refuses_to_replace_unreadable_sidecar(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    browser = _browser(tmp_path)
    sidecar = browser.root / "DESCRIPT.ION"
    sidecar.write_text("readme.txt  keep me\n", encoding="utf-8")
    real_read_text = Path.read_text

    def _deny_sidecar(self: Path, *args: object, **kwargs: object) -> str:
        if self.name == "DESCRIPT.ION":
            raise PermissionError("permission denied")
        return real_read_text(self, *args, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(Path, "read_text", _deny_sidecar)

    result = browser.update_description(
        MutationRequest(filename="docs", description="x"), ADMIN
    )

    assert result.success is False
    assert result.error == ERROR_WRITE_FAILED
    assert sidecar.read_bytes() == b"readme.txt  keep me\n"
