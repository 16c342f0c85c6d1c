"""Typed loading of ``relgate.toml``.

Example:

    [library]
    group = "com.github.example"
    name = "headlessui-reagent"
    base_version = "1.4.0"
    tag_prefix = "v"

    [paths]
    changelog = "CHANGELOG.md"
    manifest = "package.json"
    build_dir = "target"
    src_dirs = ["src"]

    [remote]
    name = "origin"

    [publish]
    command = ["twine", "upload", "{archive}"]

Every key is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LibraryConfig",
    "PathsConfig",
    "PublishConfig",
    "ReleaseConfig",
    "RemoteConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relgate.toml"

DEFAULT_GROUP = "example"
DEFAULT_NAME = "library"
DEFAULT_BASE_VERSION = "0.0.0"
DEFAULT_TAG_PREFIX = "v"
DEFAULT_REMOTE = "origin"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class LibraryConfig:
    """Identity of the library being released."""

    group: str = DEFAULT_GROUP
    name: str = DEFAULT_NAME
    # Version of the upstream package this library wraps.
    base_version: str = DEFAULT_BASE_VERSION
    tag_prefix: str = DEFAULT_TAG_PREFIX


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the project root."""

    changelog: str = "CHANGELOG.md"
    manifest: str = "package.json"
    build_dir: str = "target"
    src_dirs: tuple[str, ...] = ("src",)


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    name: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """External publish command.

    Placeholders {archive}, {manifest}, {version} and {tag} are substituted
    in every argument. None means publication is not configured.
    """

    command: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], *, default_name: str | None = None
    ) -> ReleaseConfig:
        """Create a config from a parsed TOML mapping."""
        library: StrDict = get_table(data, "library") or {}
        paths: StrDict = get_table(data, "paths") or {}
        remote: StrDict = get_table(data, "remote") or {}
        publish: StrDict = get_table(data, "publish") or {}

        src_dirs = get_str_list(paths, "src_dirs")
        command = get_str_list(publish, "command")

        return cls(
            library=LibraryConfig(
                group=get_str(library, "group") or DEFAULT_GROUP,
                name=get_str(library, "name") or default_name or DEFAULT_NAME,
                base_version=get_str(library, "base_version") or DEFAULT_BASE_VERSION,
                # An empty prefix is legal (tags equal to the bare version).
                tag_prefix=_raw_str(library, "tag_prefix", DEFAULT_TAG_PREFIX),
            ),
            paths=PathsConfig(
                changelog=get_str(paths, "changelog") or "CHANGELOG.md",
                manifest=get_str(paths, "manifest") or "package.json",
                build_dir=get_str(paths, "build_dir") or "target",
                src_dirs=tuple(src_dirs) if src_dirs is not None else ("src",),
            ),
            remote=RemoteConfig(name=get_str(remote, "name") or DEFAULT_REMOTE),
            publish=PublishConfig(command=tuple(command) if command else None),
        )


def _raw_str(table: Mapping[str, object], key: str, default: str) -> str:
    value = table.get(key)
    if isinstance(value, str):
        return value.strip()
    return default


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse ``relgate.toml``.

    The library name defaults to the name of the directory holding the file.

    Args:
        path: Path to the config file

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value, default_name=path.parent.name))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load config, falling back to defaults when the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(ReleaseConfig(library=LibraryConfig(name=path.parent.name or DEFAULT_NAME)))
    return load_config(path)
