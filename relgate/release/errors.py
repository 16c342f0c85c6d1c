"""Error payloads of the release pipeline.

Each failure a step can produce is a frozen dataclass. The CLI renders them
through ``relgate.output.errors`` and maps them to exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relgate.core.errors import ErrorCode


@dataclass(frozen=True, slots=True)
class VersionUnavailable:
    """No version can be computed (no git, not a repository, no commits)."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseBlocked:
    """A precondition does not hold.

    Attributes:
        check: Identifier of the failing precondition.
        code: Exit code reserved for it.
        message: Remediation message.
        details: Raw command output to show before the message, if any.
    """

    check: str
    code: ErrorCode
    message: str
    details: str | None = None


@dataclass(frozen=True, slots=True)
class PackageFailure:
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PublishFailure:
    message: str
    returncode: int = int(ErrorCode.PUBLISH_ERROR)
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SyncFailure:
    """Tag or branch push failed after publication."""

    remote: str
    ref: str
    returncode: int


PipelineError = ReleaseBlocked | PackageFailure | PublishFailure | SyncFailure
