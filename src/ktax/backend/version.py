"""Expose the project version for health checks and configuration metadata."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "ktax"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_SECTION = re.compile(r"^\[(?P<name>[^\]]+)\]$")
_VERSION = re.compile(r'^version\s*=\s*"(?P<value>[^"]+)"$')


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version.

    Source checkouts without an installed distribution read the
    ``[project]`` table of ``pyproject.toml`` instead.
    """

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Return ``version`` from the ``[project]`` table of ``path``."""

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    section: str | None = None
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        header = _SECTION.match(line)
        if header:
            section = header.group("name").strip()
            continue
        if section != "project":
            continue
        match = _VERSION.match(line)
        if match:
            return match.group("value")

    raise RuntimeError(f"Unable to determine project version from {path}")


__all__ = ["PACKAGE_NAME", "get_project_version", "read_pyproject_version"]
