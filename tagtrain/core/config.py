"""Typed configuration for the release train.

The configuration file is optional. Every field has a default matching the
reference crate layout (``Cargo.toml`` with a ``# crate version`` marker,
``cliff.toml`` for git-cliff, token in ``CARGO_TOKEN``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "Config",
    "ConfigError",
    "HostConfig",
    "ManifestConfig",
    "PublishConfig",
    "ReleaseSettings",
    "TAG_SORT_KEYS",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = ".tagtrain.toml"

DEFAULT_PRERELEASE_LABEL = "alpha"
DEFAULT_TAG_SORT = "creatordate"
DEFAULT_MANIFEST_PATH = "Cargo.toml"
DEFAULT_VERSION_MARKER = "# crate version"
DEFAULT_TOKEN_ENV = "CARGO_TOKEN"
DEFAULT_CHANGELOG_CONFIG = "cliff.toml"

# Keys accepted by `git tag --sort=<key>` that order by time or name.
TAG_SORT_KEYS = frozenset({"creatordate", "committerdate", "taggerdate", "refname"})

_LABEL_RE = re.compile(r"^[0-9A-Za-z-]+$")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    """How the alpha chain is named and how history is ordered."""

    prerelease_label: str = DEFAULT_PRERELEASE_LABEL
    tag_sort: str = DEFAULT_TAG_SORT


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    """Manifest location (relative to the repo root) and its marker comment."""

    path: str = DEFAULT_MANIFEST_PATH
    marker: str = DEFAULT_VERSION_MARKER


@dataclass(frozen=True, slots=True)
class PublishConfig:
    token_env: str = DEFAULT_TOKEN_ENV


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    config: str = DEFAULT_CHANGELOG_CONFIG


@dataclass(frozen=True, slots=True)
class HostConfig:
    # owner/name; None lets gh infer it from the checkout.
    repo: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseSettings = field(default_factory=ReleaseSettings)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    host: HostConfig = field(default_factory=HostConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping.

        Raises:
            ValueError: If a value is present but invalid.
        """
        release: StrDict = get_table(data, "release") or {}
        manifest: StrDict = get_table(data, "manifest") or {}
        publish: StrDict = get_table(data, "publish") or {}
        changelog: StrDict = get_table(data, "changelog") or {}
        host: StrDict = get_table(data, "host") or {}

        label = get_str(release, "prerelease_label") or DEFAULT_PRERELEASE_LABEL
        if not _LABEL_RE.match(label):
            raise ValueError(f"release.prerelease_label must be alphanumeric: {label!r}")

        tag_sort = get_str(release, "tag_sort") or DEFAULT_TAG_SORT
        if tag_sort not in TAG_SORT_KEYS:
            allowed = ", ".join(sorted(TAG_SORT_KEYS))
            raise ValueError(f"release.tag_sort must be one of {allowed}: {tag_sort!r}")

        return cls(
            release=ReleaseSettings(prerelease_label=label, tag_sort=tag_sort),
            manifest=ManifestConfig(
                path=get_str(manifest, "path") or DEFAULT_MANIFEST_PATH,
                marker=get_str(manifest, "marker") or DEFAULT_VERSION_MARKER,
            ),
            publish=PublishConfig(
                token_env=get_str(publish, "token_env") or DEFAULT_TOKEN_ENV,
            ),
            changelog=ChangelogConfig(
                config=get_str(changelog, "config") or DEFAULT_CHANGELOG_CONFIG,
            ),
            host=HostConfig(repo=get_str(host, "repo")),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Cannot read config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config when the file exists, otherwise return defaults.

    Unlike a missing file, an existing but invalid file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
