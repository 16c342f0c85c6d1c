from __future__ import annotations

from pathlib import Path

import pytest

from relgate.core.errors import ErrorCode
from relgate.output.console import MockConsole, Style
from relgate.output.errors import (
    pipeline_error_exit_code,
    print_pipeline_error,
    print_version_error,
)
from relgate.release.errors import (
    PackageFailure,
    PipelineError,
    PublishFailure,
    ReleaseBlocked,
    SyncFailure,
    VersionUnavailable,
)


def test_blocked_prints_raw_details_before_message() -> None:
    console = MockConsole()
    error = ReleaseBlocked(
        check="working-tree-clean",
        code=ErrorCode.WORKTREE_DIRTY,
        message="Git working directory must be clean. Run git commit",
        details=" M CHANGELOG.md\n?? [notes].txt",
    )

    print_pipeline_error(error, console)

    assert console.outputs[0].message == " M CHANGELOG.md\n?? [notes].txt"
    assert console.outputs[0].style == Style.DEFAULT
    assert console.messages[1] == "error: Git working directory must be clean. Run git commit"


def test_blocked_without_details_prints_only_message() -> None:
    console = MockConsole()

    print_pipeline_error(
        ReleaseBlocked(check="tag-exists", code=ErrorCode.TAG_MISSING, message="Git tag v1 ..."),
        console,
    )

    assert console.messages == ["error: Git tag v1 ..."]


def test_package_failure_hints_expected_path(tmp_path: Path) -> None:
    console = MockConsole()

    error = PackageFailure(message="source directory missing: src", path=tmp_path)

    print_pipeline_error(error, console)

    assert console.index_of("error: source directory missing") == 0
    assert console.find(f"hint: expected: {tmp_path}")


def test_sync_failure_warns_against_republishing() -> None:
    console = MockConsole()

    print_pipeline_error(SyncFailure(remote="origin", ref="v1.4.0.42", returncode=1), console)

    assert console.messages[0] == (
        "error: Couldn't sync with remote origin (push v1.4.0.42, exit 1)."
    )
    assert "do not republish" in console.messages[1]


def test_version_error() -> None:
    console = MockConsole()

    print_version_error(VersionUnavailable(message="cannot compute", hint="run git init"), console)

    assert console.messages == ["error: cannot compute", "hint: run git init"]


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ReleaseBlocked(check="c", code=ErrorCode.CHANGELOG_NOT_UPDATED, message=""), 10),
        (ReleaseBlocked(check="m", code=ErrorCode.MANIFEST_NOT_UPDATED, message=""), 11),
        (ReleaseBlocked(check="w", code=ErrorCode.WORKTREE_DIRTY, message=""), 12),
        (ReleaseBlocked(check="t", code=ErrorCode.TAG_MISSING, message=""), 13),
        (ReleaseBlocked(check="h", code=ErrorCode.TAG_NOT_ON_HEAD, message=""), 14),
        (PackageFailure(message=""), 3),
        (PublishFailure(message=""), 4),
        (PublishFailure(message="", returncode=7), 7),
        (SyncFailure(remote="origin", ref="main", returncode=128), 15),
    ],
)
def test_exit_codes(error: PipelineError, code: int) -> None:
    assert pipeline_error_exit_code(error) == code
