# tests/unit/test_project_files.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Checks on the files shipped alongside the package."""

import re
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
SOURCES = sorted(
    path for directory in ("nestedfst", "tests") for path in (ROOT / directory).rglob("*.py")
)


@pytest.mark.parametrize("path", SOURCES, ids=lambda path: path.relative_to(ROOT).as_posix())
def test_source_carries_license_header(path):
    """Test every module opens with its path and the MIT notice."""
    relative = path.relative_to(ROOT).as_posix()
    head = path.read_text(encoding="utf-8").splitlines()[:3]
    assert head[0] == f"# {relative}"
    assert head[1].startswith("# Copyright (c)")
    assert head[2] == "# Licensed under the MIT License - see LICENSE file for details"


def test_license_file_present():
    assert "MIT License" in (ROOT / "LICENSE").read_text(encoding="utf-8")


def test_readme_is_package_description():
    """Test the package long description points at the project README."""
    pyproject = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    match = re.search(r'^readme\s*=\s*"([^"]+)"', pyproject, re.MULTILINE)
    assert match is not None
    assert match.group(1) == "README.md"
    assert (ROOT / match.group(1)).read_text(encoding="utf-8").startswith("# nestedfst")
