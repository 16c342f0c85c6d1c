"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from relgate.core.errors import ErrorCode
from relgate.core.result import Err
from relgate.output.errors import pipeline_error_exit_code, print_pipeline_error
from relgate.release.context import ReleaseParams
from relgate.release.errors import PipelineError

if TYPE_CHECKING:
    from relgate.cli.context import CLIContext


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def exit_on_pipeline_error(error: PipelineError, ctx: CLIContext) -> NoReturn:
    """Render a pipeline failure and exit with its code."""
    print_pipeline_error(error, ctx.console)
    exit_with_code(pipeline_error_exit_code(error))


def parse_params(items: list[str]) -> ReleaseParams:
    result = ReleaseParams.parse(items)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error}", err=True)
        exit_with_code(int(ErrorCode.USER_ERROR))
    return result.value
