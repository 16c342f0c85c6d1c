"""Values threaded through the release steps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from relgate.core.config import ReleaseConfig
from relgate.core.project import Project
from relgate.core.result import Err, Ok, Result
from relgate.git.repository import Repository
from relgate.release.version import ReleaseTarget


def _empty_params() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ReleaseParams:
    """Operator flags passed to every step and returned unchanged.

    No step reads these values; they are carried so callers can hand the
    same object from one step to the next.
    """

    values: Mapping[str, str] = field(default_factory=_empty_params)

    @classmethod
    def parse(cls, items: Iterable[str]) -> Result[ReleaseParams, str]:
        """Parse ``key=value`` items."""
        out: dict[str, str] = {}
        for item in items:
            if "=" not in item:
                return Err(f"invalid --param (expected key=value): {item}")
            k, v = item.split("=", 1)
            k = k.strip()
            if not k:
                return Err(f"invalid --param (empty key): {item}")
            out[k] = v.strip()
        return Ok(cls(values=MappingProxyType(out)))


@dataclass(frozen=True, slots=True)
class ReleaseSession:
    """Everything a step needs, resolved once at startup."""

    project: Project
    config: ReleaseConfig
    repo: Repository
    target: ReleaseTarget

    @property
    def build_dir(self) -> Path:
        return self.project.resolve(self.config.paths.build_dir)

    @property
    def changelog_path(self) -> Path:
        return self.project.resolve(self.config.paths.changelog)

    @property
    def manifest_path(self) -> Path:
        return self.project.resolve(self.config.paths.manifest)
