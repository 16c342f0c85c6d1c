from __future__ import annotations

from pathlib import Path
from zipfile import ZipFile

import pytest
import typer

from relgate.core.errors import ErrorCode
from relgate.core.project import PROJECT_ENV_VAR
from relgate.output.console import MockConsole
from relgate.test._fakes import FakeGit


def _project(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    *,
    fake: FakeGit | None = None,
    with_src: bool = True,
) -> MockConsole:
    import relgate.cli.context as context_mod

    (tmp_path / "relgate.toml").write_text(
        '[library]\nname = "widgets"\nbase_version = "2.0.0"\n', encoding="utf-8"
    )
    if with_src:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "core.cljs").write_text("(ns widgets.core)", encoding="utf-8")

    console = MockConsole()
    git = fake or FakeGit(revision=7)
    monkeypatch.setenv(PROJECT_ENV_VAR, str(tmp_path))
    monkeypatch.setattr(context_mod, "SubprocessRunner", lambda: git)
    monkeypatch.setattr(context_mod, "RichConsole", lambda: console)
    return console


def test_version_prints_target(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relgate.cli.commands.version_cmd as version_cmd

    console = _project(tmp_path, monkeypatch)

    version_cmd.version()

    assert console.messages == ["version: 2.0.0.7", "tag: v2.0.0.7", "next: 2.0.0.8"]


def test_build_writes_archive(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relgate.cli.commands.build_cmd as build_cmd

    console = _project(tmp_path, monkeypatch)

    build_cmd.build()

    archive = tmp_path / "target" / "widgets-2.0.0.7.zip"
    assert archive.is_file()
    with ZipFile(archive) as zf:
        assert "core.cljs" in zf.namelist()
    assert console.find("OK built 2.0.0.7")


def test_build_without_sources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relgate.cli.commands.build_cmd as build_cmd

    console = _project(tmp_path, monkeypatch, with_src=False)

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build()

    assert exc.value.exit_code == int(ErrorCode.PACKAGE_ERROR)
    assert console.find("error: source directory missing: src")


def test_build_does_not_check_release_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relgate.cli.commands.build_cmd as build_cmd

    fake = FakeGit(revision=7, status=" M CHANGELOG.md\n")
    _project(tmp_path, monkeypatch, fake=fake)

    build_cmd.build()

    assert "status" not in fake.subcommands


def test_clean(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relgate.cli.commands.build_cmd as build_cmd

    console = _project(tmp_path, monkeypatch)
    (tmp_path / "target" / "classes").mkdir(parents=True)

    build_cmd.clean()
    build_cmd.clean()

    assert not (tmp_path / "target").exists()
    assert console.find("OK removed")
    assert console.messages[-1] == "Nothing to clean"
