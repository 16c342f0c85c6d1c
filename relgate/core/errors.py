"""Exit codes for the relgate CLI.

Codes 10-15 identify the gate or step that stopped a release. They are part
of the public contract (scripts and CI jobs branch on them) and must remain
stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (bad arguments)
    - 2: Environment error (no git, not a repository, bad config)
    - 3: Packaging failed
    - 4: Publication failed or is not configured
    - 10-14: A release precondition does not hold
    - 15: Release published but tags/branch could not be pushed
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    PACKAGE_ERROR = 3
    PUBLISH_ERROR = 4

    CHANGELOG_NOT_UPDATED = 10
    MANIFEST_NOT_UPDATED = 11
    WORKTREE_DIRTY = 12
    TAG_MISSING = 13
    TAG_NOT_ON_HEAD = 14
    SYNC_FAILED = 15

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
