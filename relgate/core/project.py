"""Project root detection and paths.

The project is the git checkout of the library being released. Its root is
the nearest directory (upward from the cwd) holding ``relgate.toml``; when
there is none, the nearest directory holding ``.git`` is used and the
configuration falls back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME
from .result import Err, Ok, Result

__all__ = [
    "PROJECT_ENV_VAR",
    "Project",
    "ProjectError",
    "detect_project",
    "find_project_upward",
]

PROJECT_ENV_VAR = "RELGATE_PROJECT_ROOT"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected project checkout."""

    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the project root."""
        return self.root / relative

    def __str__(self) -> str:
        return str(self.root)


def find_project_upward(start: Path) -> Path | None:
    """Search upward from ``start`` for a project root.

    A directory holding ``relgate.toml`` wins over one that only holds
    ``.git``, so a config in a parent of a nested checkout is not skipped.
    """
    candidates = (start, *start.parents)
    for parent in candidates:
        if (parent / CONFIG_FILENAME).is_file():
            return parent
    for parent in candidates:
        if (parent / ".git").exists():
            return parent
    return None


def detect_project(
    *,
    start_dir: Path | None = None,
    env_var: str = PROJECT_ENV_VAR,
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Detection order:
    1. ``$RELGATE_PROJECT_ROOT`` (set by ``--project``), if valid
    2. Search upward from start_dir (or cwd)
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir():
            return Ok(Project(root=env_path))
        return Err(
            ProjectError(
                message=f"${env_var} is set to '{env_value}' but it is not a directory",
                searched_from=None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(search_start)
    if found is None:
        return Err(
            ProjectError(
                message=f"Could not find project root ({CONFIG_FILENAME} or .git not found)",
                searched_from=search_start,
            )
        )
    return Ok(Project(root=found))
