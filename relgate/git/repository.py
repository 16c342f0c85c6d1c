"""Git operations needed by the release gate.

Each method maps to one logical version-control query or action and runs a
single blocking git command through the injected runner.

Usage:
    repo = Repository(Path("/path/to/project"))

    match repo.revision_count():
        case Ok(count):
            print(f"revision {count}")
        case Err(e):
            print(f"git failed: {e.message}")

    if repo.describe_exact_tag() == "v1.4.0.42":
        print("tagged")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relgate.core.result import Err, Ok, Result
from relgate.platform.process import CommandResult, Runner, SubprocessRunner

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path, runner: Runner | None = None) -> None:
        self.path = path
        self._runner: Runner = runner or SubprocessRunner()

    def revision_count(self) -> Result[int, GitError]:
        """Count commits reachable from HEAD (``git rev-list --count HEAD``)."""
        result = self._run(["rev-list", "--count", "HEAD"])
        if not result.ok:
            return Err(
                GitError(
                    command="rev-list --count",
                    message=_stderr(result) or "git rev-list failed",
                    returncode=result.returncode,
                )
            )

        out = (result.stdout or "").strip()
        if not out.isdigit():
            return Err(
                GitError(
                    command="rev-list --count",
                    message=f"unexpected revision count: {out!r}",
                    returncode=result.returncode,
                )
            )
        return Ok(int(out))

    def current_commit(self) -> str | None:
        """Full hash of HEAD, or None if it cannot be determined."""
        result = self._run(["rev-parse", "HEAD"])
        if not result.ok:
            return None
        sha = (result.stdout or "").strip()
        return sha or None

    def status(self) -> Result[str, GitError]:
        """Raw ``git status --porcelain`` output.

        An empty string means the working tree is clean.
        """
        result = self._run(["status", "--porcelain"])
        if not result.ok:
            return Err(
                GitError(
                    command="status",
                    message=_stderr(result) or "git status failed",
                    returncode=result.returncode,
                )
            )
        return Ok(result.stdout or "")

    def tag_exists(self, tag: str) -> bool:
        """True if ``tag`` resolves to a commit in the local history."""
        return self._run(["rev-list", "-n", "1", tag]).ok

    def describe_exact_tag(self) -> str | None:
        """Tag that points exactly at HEAD, or None if there is none."""
        result = self._run(["describe", "--tags", "--abbrev=0", "--exact-match"])
        if not result.ok:
            return None
        tag = (result.stdout or "").strip()
        return tag or None

    def current_branch(self) -> str | None:
        """Current branch name; None if detached HEAD or error."""
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        if not result.ok:
            return None
        branch = (result.stdout or "").strip()
        return None if branch in ("", "HEAD") else branch

    def push(self, remote: str, ref: str | None = None) -> CommandResult:
        """Push ``ref`` (or the current branch) to ``remote``.

        Output streams to the terminal so the operator sees what git reports.
        """
        args = ["push", remote]
        if ref is not None:
            args.append(ref)
        return self._run(args, capture=False)

    def _run(self, args: list[str], *, capture: bool = True) -> CommandResult:
        return self._runner(
            ["git", *args],
            cwd=self.path,
            capture_stdout=capture,
            capture_stderr=capture,
        )


def _stderr(result: CommandResult) -> str:
    return (result.stderr or "").strip()
