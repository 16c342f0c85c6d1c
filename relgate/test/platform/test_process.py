"""Tests for relgate.platform.process."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relgate.platform.process import CommandResult, SubprocessRunner, run

PY = sys.executable


class TestCommandResult:
    def test_str_short_command(self) -> None:
        result = CommandResult(command=("git", "status"), returncode=1)
        assert str(result) == "git status (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        result = CommandResult(command=("git", "push", "origin", "v1.0.0.3"), returncode=128)
        assert str(result) == "git push origin ... (exit 128)"

    def test_frozen(self) -> None:
        result = CommandResult(("cmd",), 1)
        with pytest.raises(AttributeError):
            result.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_captures_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)

        assert result.ok
        assert result.stdout is not None
        assert "hello" in result.stdout

    def test_nonzero_exit_is_returned(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import sys; sys.exit(42)"], cwd=tmp_path)

        assert not result.ok
        assert result.returncode == 42

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert result.stderr is not None
        assert "error msg" in result.stderr

    def test_uncaptured_streams_are_none(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "pass"], cwd=tmp_path, capture_stdout=False, capture_stderr=False)

        assert result.ok
        assert result.stdout is None
        assert result.stderr is None

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert result.returncode == -1
        assert result.stderr

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x", encoding="utf-8")

        result = run([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert result.stdout is not None
        assert "marker.txt" in result.stdout

    def test_env_is_merged_with_caller_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RELGATE_INHERITED", "from-parent")
        code = (
            "import os; "
            "print(os.environ.get('RELGATE_INHERITED', ''), os.environ.get('RELGATE_EXTRA', ''))"
        )

        result = run([PY, "-c", code], cwd=tmp_path, env={"RELGATE_EXTRA": "added"})

        assert result.stdout is not None
        assert result.stdout.split() == ["from-parent", "added"]

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)

        assert result.returncode == -1
        assert result.stderr is not None
        assert "timed out" in result.stderr


def test_subprocess_runner_delegates(tmp_path: Path) -> None:
    runner = SubprocessRunner()

    result = runner([PY, "-c", "print('ok')"], cwd=tmp_path)

    assert result.command == (PY, "-c", "print('ok')")
    assert result.ok
