from __future__ import annotations

import os
from pathlib import Path

import typer

from relgate import __version__
from relgate.cli.commands.build_cmd import build, clean
from relgate.cli.commands.release_cmd import check_release, release
from relgate.cli.commands.version_cmd import version
from relgate.core.errors import ErrorCode
from relgate.core.project import PROJECT_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command("check-release")(check_release)
app.command()(release)
app.command()(version)
app.command()(clean)
app.command()(build)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(False, "--version", help="Show relgate version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root (overrides auto detection)",
    ),
) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --project '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[PROJECT_ENV_VAR] = str(root)


def main() -> None:
    app()
