"""Artifact packaging.

Builds a zip archive of the configured source directories plus a provenance
manifest recording which commit they were built from.

Output layout (``<build>`` is the configured build directory):

    <build>/classes/...                         staged sources
    <build>/classes/META-INF/relgate/<group>/<name>/release-manifest.json
    <build>/<name>-<version>.zip                the archive

Names derive only from the library identifier and version, so later steps
can locate the outputs with :func:`artifact_paths` and no extra state.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.release.context import ReleaseSession
from relgate.release.errors import PackageFailure
from relgate.release.version import Version

MANIFEST_SCHEMA = 1
MANIFEST_FILENAME = "release-manifest.json"

@dataclass(frozen=True, slots=True)
class Artifact:
    archive: Path
    manifest: Path

def staging_dir(build_dir: Path) -> Path:
    return build_dir / "classes"

def artifact_paths(config: ReleaseConfig, build_dir: Path, version: Version) -> Artifact:
    """Where :func:`package` writes its outputs for ``version``."""
    lib = config.library
    manifest_dir = staging_dir(build_dir) / "META-INF" / "relgate" / lib.group / lib.name
    return Artifact(
        archive=build_dir / f"{lib.name}-{version}.zip",
        manifest=manifest_dir / MANIFEST_FILENAME,
    )

def _collect_dir(base_dir: Path, *, arc_prefix: str) -> list[tuple[Path, str]]:
    out: list[tuple[Path, str]] = []
    for p in sorted(base_dir.rglob("*")):
        if p.is_dir():
            continue
        rel = p.relative_to(base_dir).as_posix()
        out.append((p, f"{arc_prefix}/{rel}" if arc_prefix else rel))
    return out

def _zip_files(zip_path: Path, *, files: list[tuple[Path, str]]) -> None:
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    # Checkouts can carry mtime=0 files; ZIP cannot represent dates before 1980.
    with ZipFile(zip_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for src, arc in files:
            zf.write(src, arcname=arc)

def write_provenance_manifest(session: ReleaseSession, path: Path) -> Path:
    """Write the provenance manifest for the current HEAD."""
    lib = session.config.library
    target = session.target
    manifest = {
        "schema": MANIFEST_SCHEMA,
        "group": lib.group,
        "name": lib.name,
        "version": str(target.version),
        "base_version": target.version.base,
        "tag": target.tag,
        "commit": session.repo.current_commit() or "unknown",
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return path

def package(session: ReleaseSession) -> Result[Artifact, PackageFailure]:
    """Stage sources, write the provenance manifest and zip everything."""
    build_dir = session.build_dir
    classes = staging_dir(build_dir)
    artifact = artifact_paths(session.config, build_dir, session.target.version)

    sources: list[Path] = []
    for rel in session.config.paths.src_dirs:
        src = session.project.resolve(rel)
        if not src.is_dir():
            return Err(PackageFailure(message=f"source directory missing: {rel}", path=src))
        sources.append(src)

    # Source directories are merged into the staging root.
    classes.mkdir(parents=True, exist_ok=True)
    for src in sources:
        shutil.copytree(src, classes, dirs_exist_ok=True)

    write_provenance_manifest(session, artifact.manifest)
    _zip_files(artifact.archive, files=_collect_dir(classes, arc_prefix=""))
    return Ok(artifact)
