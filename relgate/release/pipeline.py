"""Release orchestration.

    CheckReleaseReady -> Clean -> Package -> Publish -> SyncTags -> Done

Every stage runs to completion before the next starts, and the first failure
ends the run. Nothing is rolled back: packaging, publication and pushes only
add things, and the supported recovery is to fix the cause and run the whole
pipeline again.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from relgate.core.result import Err, Ok, Result
from relgate.output.console import ConsoleProtocol, Style
from relgate.release.checks import check_release_ready
from relgate.release.context import ReleaseParams, ReleaseSession
from relgate.release.errors import PackageFailure, PipelineError, PublishFailure, SyncFailure
from relgate.release.package import Artifact, package
from relgate.release.publish import publish

__all__ = [
    "ReleasePipeline",
    "Stage",
    "build",
    "clean",
    "sync_tags",
]

type Packager = Callable[[ReleaseSession], Result[Artifact, PackageFailure]]
type Publisher = Callable[[ReleaseSession, Artifact], Result[None, PublishFailure]]


class Stage(Enum):
    CHECK_RELEASE_READY = "check release ready"
    CLEAN = "clean"
    PACKAGE = "package"
    PUBLISH = "publish"
    SYNC_TAGS = "sync tags"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


def clean(session: ReleaseSession, params: ReleaseParams) -> ReleaseParams:
    """Remove the build directory. Absent is fine."""
    if session.build_dir.exists():
        shutil.rmtree(session.build_dir)
    return params


def build(
    session: ReleaseSession,
    params: ReleaseParams,
    *,
    packager: Packager = package,
) -> Result[tuple[ReleaseParams, Artifact], PackageFailure]:
    """Clean, then package."""
    params = clean(session, params)
    artifact = packager(session)
    if isinstance(artifact, Err):
        return artifact
    return Ok((params, artifact.value))


def sync_tags(
    session: ReleaseSession, params: ReleaseParams
) -> Result[ReleaseParams, SyncFailure]:
    """Push the release tag, then the current branch.

    The tag goes first so it is shared even when the branch push fails.
    """
    remote = session.config.remote.name
    tag = session.target.tag

    pushed = session.repo.push(remote, tag)
    if not pushed.ok:
        return Err(SyncFailure(remote=remote, ref=tag, returncode=pushed.returncode))

    pushed = session.repo.push(remote)
    if not pushed.ok:
        branch = session.repo.current_branch() or "HEAD"
        return Err(SyncFailure(remote=remote, ref=branch, returncode=pushed.returncode))

    return Ok(params)


def _no_stages() -> list[Stage]:
    return []


@dataclass
class ReleasePipeline:
    """Runs the full release for one session.

    ``stages`` records every stage that was started, in order.
    """

    session: ReleaseSession
    console: ConsoleProtocol
    packager: Packager = package
    publisher: Publisher = publish
    stages: list[Stage] = field(default_factory=_no_stages)

    def check(self, params: ReleaseParams) -> Result[ReleaseParams, PipelineError]:
        self._enter(Stage.CHECK_RELEASE_READY)
        result = check_release_ready(self.session, params)
        if isinstance(result, Err):
            return result
        self.console.success(f"ready to release {self.session.target.tag}")
        return result

    def run(self, params: ReleaseParams) -> Result[ReleaseParams, PipelineError]:
        ready = self.check(params)
        if isinstance(ready, Err):
            return ready

        self._enter(Stage.CLEAN)
        params = clean(self.session, ready.value)

        self._enter(Stage.PACKAGE)
        artifact = self.packager(self.session)
        if isinstance(artifact, Err):
            return artifact
        self.console.print(f"archive: {artifact.value.archive}", Style.DIM)
        self.console.print(f"manifest: {artifact.value.manifest}", Style.DIM)

        self._enter(Stage.PUBLISH)
        published = self.publisher(self.session, artifact.value)
        if isinstance(published, Err):
            return published

        self._enter(Stage.SYNC_TAGS)
        synced = sync_tags(self.session, params)
        if isinstance(synced, Err):
            return synced

        self._enter(Stage.DONE)
        self.console.success(f"released {self.session.target.tag}")
        return Ok(params)

    def _enter(self, stage: Stage) -> None:
        self.stages.append(stage)
        if stage is not Stage.DONE:
            self.console.header(str(stage))
