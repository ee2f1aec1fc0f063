"""Shared fixtures for react-extras tests."""

import json
from pathlib import Path

import pytest

from react_extras.context import Context, Framework, PackageManager, Tooling


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory with a minimal package.json."""
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "x", "scripts": {}}, indent=2) + "\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def make_context(tmp_path: Path):
    """Build a Context rooted at tmp_path; keyword args override the defaults."""

    def _make(**overrides) -> Context:
        values = {
            "cwd": tmp_path,
            "package_manager": PackageManager.NPM,
            "tooling": Tooling.BIOME,
            "framework": Framework.NEXTJS,
            "node_version": "22",
        }
        values.update(overrides)
        return Context(**values)

    return _make
