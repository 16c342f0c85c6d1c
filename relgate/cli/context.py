from __future__ import annotations

from dataclasses import dataclass

import typer

from relgate.core.config import load_config_or_default
from relgate.core.errors import ErrorCode
from relgate.core.project import Project, detect_project
from relgate.core.result import Err
from relgate.git.repository import Repository
from relgate.output.console import ConsoleProtocol, RichConsole
from relgate.output.errors import print_version_error
from relgate.platform.process import SubprocessRunner
from relgate.release.context import ReleaseSession
from relgate.release.version import ReleaseTarget, resolve_version


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    session: ReleaseSession
    console: ConsoleProtocol


def build_context() -> CLIContext:
    """Resolve project, config and release version, or exit with ENV_ERROR."""
    console = RichConsole()

    project_result = detect_project()
    if isinstance(project_result, Err):
        console.error(project_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    project = project_result.value

    config_result = load_config_or_default(project.config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    config = config_result.value

    repo = Repository(project.root, SubprocessRunner())
    version = resolve_version(repo, base=config.library.base_version)
    if isinstance(version, Err):
        print_version_error(version.error, console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    session = ReleaseSession(
        project=project,
        config=config,
        repo=repo,
        target=ReleaseTarget.of(version.value, tag_prefix=config.library.tag_prefix),
    )
    return CLIContext(project=project, session=session, console=console)
