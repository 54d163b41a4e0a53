"""Project root detection.

The project root is the directory holding the manifest (``Cargo.toml``) or a
``relkit.toml`` config. All configured paths are resolved relative to it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME, DEFAULT_MANIFEST
from .result import Err, Ok, Result

__all__ = [
    "Project",
    "ProjectError",
    "ROOT_ENV_VAR",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

ROOT_ENV_VAR = "RELKIT_ROOT"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the root (absolute paths pass through)."""
        path = Path(relative).expanduser()
        if path.is_absolute():
            return path
        return self.root / path

    def __str__(self) -> str:
        return str(self.root)


def is_project_root(path: Path) -> bool:
    return (path / CONFIG_FILENAME).is_file() or (path / DEFAULT_MANIFEST).is_file()


def find_project_upward(start: Path) -> Path | None:
    for parent in (start, *start.parents):
        if is_project_root(parent):
            return parent
    return None


def detect_project(
    *,
    start_dir: Path | None = None,
    env_var: str = ROOT_ENV_VAR,
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Detection order:
    1. ``$RELKIT_ROOT`` (must point at a directory)
    2. Upward search from start_dir (or cwd) for relkit.toml or Cargo.toml
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir():
            return Ok(Project(root=env_path))
        return Err(
            ProjectError(
                message=f"${env_var} is set to '{env_value}' but it is not a directory",
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(search_start)
    if found is None:
        return Err(
            ProjectError(
                message=f"Could not find project root ({CONFIG_FILENAME} or {DEFAULT_MANIFEST})",
                searched_from=search_start,
            )
        )
    return Ok(Project(root=found))
