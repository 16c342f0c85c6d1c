"""Error presentation and exit code mapping for pipeline failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relgate.core.errors import ErrorCode
from relgate.release.errors import (
    PackageFailure,
    PipelineError,
    PublishFailure,
    ReleaseBlocked,
    SyncFailure,
    VersionUnavailable,
)

if TYPE_CHECKING:
    from relgate.output.console import ConsoleProtocol

__all__ = [
    "pipeline_error_exit_code",
    "print_pipeline_error",
    "print_version_error",
]


def print_pipeline_error(error: PipelineError, console: ConsoleProtocol) -> None:
    match error:
        case ReleaseBlocked(message=message, details=details):
            # Raw git output first, so the operator sees exactly what is dirty.
            if details:
                console.print(details)
            console.error(message)
        case PackageFailure(message=message, path=path):
            console.error(message)
            if path is not None:
                console.hint(f"expected: {path}")
        case PublishFailure(message=message, hint=hint):
            console.error(message)
            if hint:
                console.hint(hint)
        case SyncFailure(remote=remote, ref=ref, returncode=rc):
            console.error(f"Couldn't sync with remote {remote} (push {ref}, exit {rc}).")
            console.hint(
                "The release is already published; do not republish. "
                f"Push manually: git push {remote} <tag> && git push {remote}"
            )


def print_version_error(error: VersionUnavailable, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.hint(error.hint)


def pipeline_error_exit_code(error: PipelineError) -> int:
    match error:
        case ReleaseBlocked(code=code):
            return int(code)
        case PackageFailure():
            return int(ErrorCode.PACKAGE_ERROR)
        case PublishFailure(returncode=rc):
            return rc
        case SyncFailure():
            return int(ErrorCode.SYNC_FAILED)
        case _:
            raise AssertionError(f"unexpected pipeline error: {error!r}")
