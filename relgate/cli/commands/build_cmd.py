"""Build commands: clean and package without releasing."""

from __future__ import annotations

from relgate.cli.commands._helpers import exit_on_pipeline_error
from relgate.cli.context import build_context
from relgate.core.result import Err
from relgate.output.console import Style
from relgate.release import pipeline
from relgate.release.context import ReleaseParams


def clean() -> None:
    """Remove the build directory."""
    ctx = build_context()
    build_dir = ctx.session.build_dir
    if not build_dir.exists():
        ctx.console.print("Nothing to clean", Style.DIM)
        return

    pipeline.clean(ctx.session, ReleaseParams())
    ctx.console.success(f"removed {build_dir}")


def build() -> None:
    """Clean, then package the library (no checks, no publish)."""
    ctx = build_context()
    result = pipeline.build(ctx.session, ReleaseParams())
    if isinstance(result, Err):
        exit_on_pipeline_error(result.error, ctx)

    _, artifact = result.value
    ctx.console.success(f"built {ctx.session.target.version}")
    ctx.console.print(f"archive: {artifact.archive}", Style.DIM)
    ctx.console.print(f"manifest: {artifact.manifest}", Style.DIM)
