"""Release version derived from git history.

A release version is ``<base>.<revision>``: ``base`` is the version of the
upstream package being wrapped and ``revision`` is the number of commits
reachable from HEAD, so it never decreases along a branch.
"""

from __future__ import annotations

from dataclasses import dataclass

from relgate.core.result import Err, Ok, Result
from relgate.git.repository import Repository
from relgate.release.errors import VersionUnavailable


@dataclass(frozen=True, slots=True)
class Version:
    base: str
    revision: int

    def next(self) -> Version:
        """Version a new commit on top of HEAD would carry."""
        return Version(self.base, self.revision + 1)

    def tag(self, prefix: str) -> str:
        return f"{prefix}{self}"

    def __str__(self) -> str:
        return f"{self.base}.{self.revision}"


@dataclass(frozen=True, slots=True)
class ReleaseTarget:
    """Values computed once per invocation and passed read-only everywhere."""

    version: Version
    tag: str

    @property
    def next_version(self) -> Version:
        return self.version.next()

    @classmethod
    def of(cls, version: Version, *, tag_prefix: str) -> ReleaseTarget:
        return cls(version=version, tag=version.tag(tag_prefix))


def resolve_version(repo: Repository, *, base: str) -> Result[Version, VersionUnavailable]:
    """Compute the release version from the revision count at HEAD."""
    count = repo.revision_count()
    if isinstance(count, Err):
        return Err(
            VersionUnavailable(
                message=f"cannot compute release version: {count.error.message}",
                hint="Run relgate inside a git checkout with at least one commit.",
            )
        )
    return Ok(Version(base=base, revision=count.value))
