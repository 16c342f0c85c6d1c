"""External command execution.

Every git and publish invocation goes through :func:`run`. It always returns
a :class:`CommandResult`; a non-zero exit status is data for the caller to
inspect, never an exception.

No timeout is applied unless the caller passes one. Git is assumed to be
local and fast, and publish/push commands are bounded only by their own
behaviour; the operator can interrupt the whole process.

Usage:
    result = run(["git", "status", "--porcelain"], cwd=project_root)
    if result.ok and not result.stdout.strip():
        print("clean")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

__all__ = ["CommandResult", "Runner", "SubprocessRunner", "run"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one external command.

    Attributes:
        command: The argv that was executed.
        returncode: Exit status; -1 when the process could not be started
            or timed out.
        stdout: Captured standard output, None when not captured.
        stderr: Captured standard error, None when not captured.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str | None = None
    stderr: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} (exit {self.returncode})"


class Runner(Protocol):
    """Capability to run a command and get back its status and output."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult: ...


def _merged_env(env: Mapping[str, str] | None) -> dict[str, str] | None:
    if env is None:
        return None
    merged = os.environ.copy()
    merged.update(env)
    return merged


def run(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    capture_stdout: bool = True,
    capture_stderr: bool = True,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Execute a command and block until it exits.

    Args:
        argv: Command and arguments.
        cwd: Working directory (inherits the caller's when None).
        capture_stdout: Capture stdout instead of streaming it to the terminal.
        capture_stderr: Capture stderr instead of streaming it to the terminal.
        env: Extra variables merged over the caller's environment.
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        CommandResult with the exit status and any captured output.
    """
    command = tuple(argv)
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            env=_merged_env(env),
            stdout=subprocess.PIPE if capture_stdout else None,
            stderr=subprocess.PIPE if capture_stderr else None,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            command=command,
            returncode=-1,
            stdout="" if capture_stdout else None,
            stderr=f"Command timed out after {timeout}s",
        )
    except OSError as e:
        return CommandResult(
            command=command,
            returncode=-1,
            stdout="" if capture_stdout else None,
            stderr=str(e),
        )

    return CommandResult(
        command=command,
        returncode=proc.returncode,
        stdout=proc.stdout if capture_stdout else None,
        stderr=proc.stderr if capture_stderr else None,
    )


class SubprocessRunner:
    """Runner backed by real processes."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        return run(
            argv,
            cwd=cwd,
            capture_stdout=capture_stdout,
            capture_stderr=capture_stderr,
            env=env,
        )
