"""Release gate and publication pipeline.

- version: release version from git history
- checks: ordered release preconditions
- package / publish: default packaging and publication collaborators
- pipeline: stage sequencing and tag sync
"""

from __future__ import annotations
