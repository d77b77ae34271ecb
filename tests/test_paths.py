"""Path confinement tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from filelight.paths import (
    ConfinementError,
    PathResolver,
    build_breadcrumb,
    build_link_path,
    canonicalize_root,
    confine,
)


def _root(tmp_path: Path) -> Path:
    """Return a canonical browse root containing a nested directory.

    Args:
        tmp_path: Temporary directory provided by pytest.

    Returns:
        Path: Canonicalized root directory.
    """
    root = tmp_path / "root"
    (root / "docs" / "nested").mkdir(parents=True)
    (root / "docs" / "file.txt").write_text("x", encoding="utf-8")
    return canonicalize_root(root)


def test_empty_relative_path_is_root(tmp_path: Path) -> None:
    root = _root(tmp_path)

    assert confine(root, "") == root
    assert confine(root, "/") == root


def test_separators_are_trimmed(tmp_path: Path) -> None:
    root = _root(tmp_path)

    assert confine(root, "/docs/nested/") == root / "docs" / "nested"


@pytest.mark.parametrize(
    "relative",
    ["..", "../", "../..", "docs/../..", "docs/nested/../../../root2", "/../etc"],
)
def test_parent_escapes_are_forbidden(tmp_path: Path, relative: str) -> None:
    root = _root(tmp_path)
    (tmp_path / "root2").mkdir()

    with pytest.raises(ConfinementError):
        confine(root, relative)


def test_dotdot_that_stays_inside_is_allowed(tmp_path: Path) -> None:
    root = _root(tmp_path)

    assert confine(root, "docs/nested/..") == root / "docs"


def test_missing_path_is_forbidden(tmp_path: Path) -> None:
    root = _root(tmp_path)

    with pytest.raises(ConfinementError):
        confine(root, "does-not-exist")


def test_sibling_with_common_prefix_is_forbidden(tmp_path: Path) -> None:
    root = _root(tmp_path)
    (tmp_path / "rootkit").mkdir()

    with pytest.raises(ConfinementError):
        confine(root, "../rootkit")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_leaving_root_is_forbidden(tmp_path: Path) -> None:
    root = _root(tmp_path)
    outside = tmp_path / "outside"
    outside.mkdir()
    (root / "escape").symlink_to(outside, target_is_directory=True)

    with pytest.raises(ConfinementError):
        confine(root, "escape")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_inside_root_is_allowed(tmp_path: Path) -> None:
    root = _root(tmp_path)
    (root / "shortcut").symlink_to(root / "docs", target_is_directory=True)

    assert confine(root, "shortcut") == root / "docs"


def test_canonicalize_root_rejects_files(tmp_path: Path) -> None:
    target = tmp_path / "plain.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(ConfinementError):
        canonicalize_root(target)
    with pytest.raises(ConfinementError):
        canonicalize_root(tmp_path / "missing")


def test_path_resolver_relative(tmp_path: Path) -> None:
    resolver = PathResolver(_root(tmp_path))

    nested = resolver.confine("docs/nested")

    assert resolver.relative(nested) == "docs/nested"
    assert resolver.relative(resolver.confine("")) == ""


def test_build_breadcrumb_accumulates_segments() -> None:
    crumbs = build_breadcrumb("photos/2024/summer")

    assert [(crumb.name, crumb.path) for crumb in crumbs] == [
        ("photos", "photos"),
        ("2024", "photos/2024"),
        ("summer", "photos/2024/summer"),
    ]
    assert build_breadcrumb("") == []


def test_build_link_path_encodes_segments() -> None:
    assert build_link_path("my docs", "a&b #1.txt") == "my%20docs/a%26b%20%231.txt"
    assert build_link_path("", "plain.txt") == "plain.txt"
