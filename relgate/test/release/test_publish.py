from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from relgate.core.config import LibraryConfig, PublishConfig, ReleaseConfig
from relgate.core.result import Err, Ok
from relgate.platform.process import CommandResult
from relgate.release.package import Artifact
from relgate.release.publish import publish, publish_command
from relgate.test._fakes import FakeGit, make_session


class RecordingRunner:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[tuple[str, ...], bool]] = []

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        self.calls.append((tuple(argv), capture_stdout))
        return CommandResult(command=tuple(argv), returncode=self.returncode)


def _session(tmp_path: Path, command: tuple[str, ...] | None):  # type: ignore[no-untyped-def]
    config = ReleaseConfig(
        library=LibraryConfig(group="com.example", name="widgets", base_version="1.4.0"),
        publish=PublishConfig(command=command),
    )
    return make_session(tmp_path, FakeGit(), config=config)


def _artifact(tmp_path: Path) -> Artifact:
    return Artifact(archive=tmp_path / "w.zip", manifest=tmp_path / "m.json")


def test_command_placeholders(tmp_path: Path) -> None:
    session = _session(tmp_path, ("deploy", "{archive}", "--pom={manifest}", "{tag}", "{version}"))

    cmd = publish_command(session, _artifact(tmp_path))

    assert cmd == [
        "deploy",
        str(tmp_path / "w.zip"),
        f"--pom={tmp_path / 'm.json'}",
        "v1.4.0.42",
        "1.4.0.42",
    ]


def test_publish_streams_output(tmp_path: Path) -> None:
    runner = RecordingRunner()

    session = _session(tmp_path, ("deploy", "{archive}"))

    result = publish(session, _artifact(tmp_path), runner=runner)

    assert result == Ok(None)
    assert runner.calls == [(("deploy", str(tmp_path / "w.zip")), False)]


def test_publish_failure_keeps_exit_status(tmp_path: Path) -> None:
    runner = RecordingRunner(returncode=7)

    result = publish(_session(tmp_path, ("deploy",)), _artifact(tmp_path), runner=runner)

    assert isinstance(result, Err)
    assert result.error.returncode == 7


def test_publish_unstartable_command_is_failure(tmp_path: Path) -> None:
    runner = RecordingRunner(returncode=-1)

    result = publish(_session(tmp_path, ("deploy",)), _artifact(tmp_path), runner=runner)

    assert isinstance(result, Err)
    assert result.error.returncode == 1


def test_publish_not_configured(tmp_path: Path) -> None:
    runner = RecordingRunner()

    result = publish(_session(tmp_path, None), _artifact(tmp_path), runner=runner)

    assert isinstance(result, Err)
    assert result.error.returncode == 4
    assert runner.calls == []


def test_unknown_placeholder(tmp_path: Path) -> None:
    runner = RecordingRunner()

    result = publish(_session(tmp_path, ("deploy", "{repo}")), _artifact(tmp_path), runner=runner)

    assert isinstance(result, Err)
    assert "placeholder" in result.error.message
    assert runner.calls == []


def test_malformed_braces(tmp_path: Path) -> None:
    runner = RecordingRunner()

    session = _session(tmp_path, ("deploy", "--meta=a}b"))

    result = publish(session, _artifact(tmp_path), runner=runner)

    assert isinstance(result, Err)
    assert result.error.returncode == 4
    assert "Single '}'" in result.error.message
    assert runner.calls == []
