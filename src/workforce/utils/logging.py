"""
Project metadata for log records (service name and version).

The installed distribution is asked first; a source checkout falls back to
the nearest pyproject.toml.
"""
import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DIST_NAME = "workforce-api"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Walk up from `start` looking for pyproject.toml."""
    for directory in [start, *start.parents][: max_up + 1]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=1)
def _project_table() -> dict[str, Any]:
    pyproject = find_pyproject(Path(__file__).resolve().parent)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_project_name(default: str = DIST_NAME) -> str:
    return _project_table().get("name") or default


def get_project_version(default: str = "unknown") -> str:
    """Installed distribution version, else project.version, else `default`."""
    try:
        return importlib_metadata.version(get_project_name())
    except importlib_metadata.PackageNotFoundError:
        return _project_table().get("version") or default


__all__ = ["find_pyproject", "get_project_name", "get_project_version"]
