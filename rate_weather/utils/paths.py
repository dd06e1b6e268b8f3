"""Locate files relative to the Rate Weather checkout."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


MARKERS = ("config.yaml", "pyproject.toml")


def _has_marker(directory: Path) -> bool:
    return any((directory / marker).exists() for marker in MARKERS)


def find_project_root(start: Optional[Path] = None) -> Path:
    """Return the directory holding config.yaml or pyproject.toml.

    Search order: RATE_WEATHER_ROOT, ``start``, the working directory, then
    the package's own location. Falls back to the working directory.
    """
    override = os.getenv("RATE_WEATHER_ROOT")
    if override and Path(override).expanduser().is_dir():
        return Path(override).expanduser().resolve()

    origins = [Path(start)] if start is not None else []
    origins += [Path.cwd(), Path(__file__).resolve().parent]
    for origin in origins:
        origin = origin.resolve()
        for directory in (origin, *origin.parents):
            if _has_marker(directory):
                return directory
    return Path.cwd()


def resolve_project_path(path_str: str, root: Optional[Path] = None) -> Path:
    """Absolute paths pass through; relative ones hang off the project root."""
    path = Path(path_str).expanduser()
    if path.is_absolute():
        return path
    return ((root or find_project_root()) / path).resolve()
