"""Tests enforcing dependency pinning policy for the distribution."""

from __future__ import annotations

from pathlib import Path

import tomllib

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _load() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))


def test_all_dependencies_are_pinned() -> None:
    """Project dependencies must be pinned to exact versions."""

    data = _load()
    dependencies = data["project"]["dependencies"]
    optional = data["project"].get("optional-dependencies", {})

    for requirement in dependencies:
        assert "==" in requirement, f"Core dependency not pinned: {requirement}"

    for group, requirements in optional.items():
        for requirement in requirements:
            assert "==" in requirement, (
                f"Optional dependency '{group}' not pinned: {requirement}"
            )


def test_packaged_factor_data_is_shipped() -> None:
    """The default emission factors must be installed with the package."""

    package_data = _load()["tool"]["setuptools"]["package-data"]
    assert "*.json" in package_data["ecobot.data"]
