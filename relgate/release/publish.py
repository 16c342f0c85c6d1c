"""Hand a packaged artifact to the configured publish command.

The command is a single best-effort attempt. Whether publishing the same
version twice is rejected or accepted is up to the remote registry; relgate
keeps no record of what was published.
"""

from __future__ import annotations

from relgate.core.result import Err, Ok, Result
from relgate.platform.process import Runner, SubprocessRunner
from relgate.release.context import ReleaseSession
from relgate.release.errors import PublishFailure
from relgate.release.package import Artifact


def publish_command(session: ReleaseSession, artifact: Artifact) -> list[str] | None:
    """Configured publish argv with placeholders filled in."""
    command = session.config.publish.command
    if command is None:
        return None
    fields = {
        "archive": str(artifact.archive),
        "manifest": str(artifact.manifest),
        "version": str(session.target.version),
        "tag": session.target.tag,
    }
    return [arg.format(**fields) for arg in command]


def publish(
    session: ReleaseSession,
    artifact: Artifact,
    *,
    runner: Runner | None = None,
) -> Result[None, PublishFailure]:
    try:
        cmd = publish_command(session, artifact)
    except (KeyError, IndexError, ValueError) as e:
        return Err(
            PublishFailure(
                message=f"invalid placeholder in publish command: {e}",
                hint="Available placeholders: {archive} {manifest} {version} {tag}",
            )
        )
    if cmd is None:
        return Err(
            PublishFailure(
                message="no publish command configured",
                hint='Set [publish] command = ["...", "{archive}"] in relgate.toml',
            )
        )

    run = runner or SubprocessRunner()
    result = run(cmd, cwd=session.project.root, capture_stdout=False, capture_stderr=False)
    if not result.ok:
        return Err(
            PublishFailure(
                message=f"publish failed: {result}",
                returncode=result.returncode if result.returncode > 0 else 1,
                hint="Re-run `relgate release` once the registry accepts the upload.",
            )
        )
    return Ok(None)
