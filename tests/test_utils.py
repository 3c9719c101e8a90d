from __future__ import annotations

from pathlib import Path

from apicheck.utils import safe_relpath


def test_safe_relpath_inside_root(tmp_path: Path) -> None:
    path = tmp_path / "src" / "a.js"
    assert safe_relpath(path, tmp_path) == "src/a.js"


def test_safe_relpath_outside_root_keeps_path(tmp_path: Path) -> None:
    other = tmp_path / "other.js"
    root = tmp_path / "project"
    assert safe_relpath(other, root) == other.as_posix()
