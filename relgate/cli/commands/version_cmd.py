from __future__ import annotations

from relgate.cli.context import build_context


def version() -> None:
    """Show the release version, tag and next version."""
    ctx = build_context()
    target = ctx.session.target
    ctx.console.print(f"version: {target.version}")
    ctx.console.print(f"tag: {target.tag}")
    ctx.console.print(f"next: {target.next_version}")
