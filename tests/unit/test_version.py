"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from ktax.backend.version import (
    PYPROJECT_PATH,
    get_project_version,
    read_pyproject_version,
)


@pytest.fixture(autouse=True)
def _clear_version_cache():
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    yield
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_pyproject_version_is_read_from_project_table() -> None:
    assert read_pyproject_version(PYPROJECT_PATH) == "0.1.0"


def test_installed_metadata_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"


def test_falls_back_to_pyproject(monkeypatch: pytest.MonkeyPatch) -> None:
    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_pyproject_version(PYPROJECT_PATH)


def test_version_outside_project_table_is_ignored(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        '[tool.other]\nversion = "1.2.3"\n\n[project]\nname = "x"\nversion = "2.0.0"\n',
        encoding="utf-8",
    )

    assert read_pyproject_version(pyproject) == "2.0.0"


def test_missing_version_raises(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "x"\n', encoding="utf-8")

    with pytest.raises(RuntimeError):
        read_pyproject_version(pyproject)
