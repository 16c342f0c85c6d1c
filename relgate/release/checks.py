"""Release preconditions.

The checks run in a fixed order and the first failure stops the run:

1. changelog mentions the release tag
2. manifest mentions the release version
3. git working tree is clean
4. release tag exists and points at HEAD

Document checks come first so the operator can still edit and amend before
committing; the tag check comes last so the tag is compared against the
commit that will actually be released.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from relgate.core.errors import ErrorCode
from relgate.core.result import Err, Ok, Result
from relgate.release.context import ReleaseParams, ReleaseSession
from relgate.release.errors import ReleaseBlocked

__all__ = [
    "CHANGELOG_UPDATED",
    "MANIFEST_VERSION_UPDATED",
    "PRECONDITIONS",
    "Precondition",
    "TAG_EXISTS",
    "TAG_ON_HEAD",
    "WORKING_TREE_CLEAN",
    "check_release_ready",
]

type CheckResult = Result[None, ReleaseBlocked]


@dataclass(frozen=True, slots=True)
class Precondition:
    """A named gate with its failure message template and exit code.

    Templates are ``str.format`` strings; available fields are ``path``,
    ``version``, ``next_version`` and ``tag``.
    """

    id: str
    code: ErrorCode
    template: str

    def blocked(
        self,
        session: ReleaseSession,
        *,
        path: Path | None = None,
        details: str | None = None,
    ) -> ReleaseBlocked:
        target = session.target
        message = self.template.format(
            path=path.name if path is not None else "",
            version=target.version,
            next_version=target.next_version,
            tag=target.tag,
        )
        return ReleaseBlocked(check=self.id, code=self.code, message=message, details=details)


_AMEND_OR_NEW = (
    "\n  * If you will amend the current commit, use {version}"
    "\n  * If you intend to create a new commit, use {next_version}"
)

CHANGELOG_UPDATED = Precondition(
    id="changelog-updated",
    code=ErrorCode.CHANGELOG_NOT_UPDATED,
    template="{path} must include tag." + _AMEND_OR_NEW,
)

MANIFEST_VERSION_UPDATED = Precondition(
    id="manifest-version-updated",
    code=ErrorCode.MANIFEST_NOT_UPDATED,
    template="{path} must include version." + _AMEND_OR_NEW,
)

WORKING_TREE_CLEAN = Precondition(
    id="working-tree-clean",
    code=ErrorCode.WORKTREE_DIRTY,
    template="Git working directory must be clean. Run git commit",
)

TAG_EXISTS = Precondition(
    id="tag-exists",
    code=ErrorCode.TAG_MISSING,
    template="Git tag {tag} must exist. Run git tag {tag}",
)

TAG_ON_HEAD = Precondition(
    id="tag-on-head",
    code=ErrorCode.TAG_NOT_ON_HEAD,
    template=(
        "Git tag {tag} must be on HEAD.\n\n"
        "Proceed with caution, because this tag may have already been released. "
        "If you've determined it's safe, run `git tag -d {tag}` before tagging HEAD again."
    ),
)


def _read_text(path: Path) -> Result[str, str]:
    """File contents, or "" when absent. Undecodable bytes are replaced."""
    try:
        return Ok(path.read_text(encoding="utf-8", errors="replace"))
    except FileNotFoundError:
        return Ok("")
    except OSError as e:
        return Err(str(e))


def _check_mentions(
    session: ReleaseSession, precondition: Precondition, path: Path, needle: str
) -> CheckResult:
    text = _read_text(path)
    if isinstance(text, Err):
        return Err(precondition.blocked(session, path=path, details=text.error))
    if needle not in text.value:
        return Err(precondition.blocked(session, path=path))
    return Ok(None)


def check_changelog_updated(session: ReleaseSession) -> CheckResult:
    return _check_mentions(
        session, CHANGELOG_UPDATED, session.changelog_path, session.target.tag
    )


def check_manifest_version_updated(session: ReleaseSession) -> CheckResult:
    # Manifests carry the bare version, never the tag prefix.
    return _check_mentions(
        session, MANIFEST_VERSION_UPDATED, session.manifest_path, str(session.target.version)
    )


def check_working_tree_clean(session: ReleaseSession) -> CheckResult:
    status = session.repo.status()
    if isinstance(status, Err):
        # Cannot prove the tree is clean.
        return Err(WORKING_TREE_CLEAN.blocked(session, details=status.error.message))

    changes = status.value
    if changes.strip():
        return Err(WORKING_TREE_CLEAN.blocked(session, details=changes.rstrip("\n")))
    return Ok(None)


def check_tag_on_head(session: ReleaseSession) -> CheckResult:
    tag = session.target.tag
    if not session.repo.tag_exists(tag):
        return Err(TAG_EXISTS.blocked(session))

    if session.repo.describe_exact_tag() != tag:
        return Err(TAG_ON_HEAD.blocked(session))
    return Ok(None)


PRECONDITIONS: tuple[tuple[str, Callable[[ReleaseSession], CheckResult]], ...] = (
    (CHANGELOG_UPDATED.id, check_changelog_updated),
    (MANIFEST_VERSION_UPDATED.id, check_manifest_version_updated),
    (WORKING_TREE_CLEAN.id, check_working_tree_clean),
    (TAG_ON_HEAD.id, check_tag_on_head),
)


def check_release_ready(
    session: ReleaseSession,
    params: ReleaseParams,
    *,
    checks: tuple[tuple[str, Callable[[ReleaseSession], CheckResult]], ...] = PRECONDITIONS,
) -> Result[ReleaseParams, ReleaseBlocked]:
    """Run every precondition in order, stopping at the first failure.

    Returns:
        Ok(params) unchanged when all checks pass, else the first Err.
    """
    for _, check in checks:
        result = check(session)
        if isinstance(result, Err):
            return result
    return Ok(params)
