from __future__ import annotations

import typer

from relgate.cli.commands._helpers import exit_on_pipeline_error, parse_params
from relgate.cli.context import build_context
from relgate.core.result import Err
from relgate.output.console import Style
from relgate.release.pipeline import ReleasePipeline


def check_release(
    param: list[str] = typer.Option([], "--param", help="Pass-through flag (key=value)"),
) -> None:
    """Check that the library is ready to be released.

    Checks, in order: changelog references the tag, manifest references the
    version, working tree is clean, tag exists and is on HEAD.
    """
    params = parse_params(param)
    ctx = build_context()

    ctx.console.print(f"project: {ctx.project.root}", Style.DIM)
    ctx.console.print(f"version: {ctx.session.target.version}", Style.DIM)

    pipeline = ReleasePipeline(session=ctx.session, console=ctx.console)
    result = pipeline.check(params)
    if isinstance(result, Err):
        exit_on_pipeline_error(result.error, ctx)


def release(
    param: list[str] = typer.Option([], "--param", help="Pass-through flag (key=value)"),
) -> None:
    """Release the library.

    Runs check-release, cleans the build directory, packages and publishes
    the artifact, then pushes the tag and the current branch.
    """
    params = parse_params(param)
    ctx = build_context()

    ctx.console.print(f"project: {ctx.project.root}", Style.DIM)
    ctx.console.print(f"version: {ctx.session.target.version}", Style.DIM)

    pipeline = ReleasePipeline(session=ctx.session, console=ctx.console)
    result = pipeline.run(params)
    if isinstance(result, Err):
        exit_on_pipeline_error(result.error, ctx)
