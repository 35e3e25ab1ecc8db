"""Typed configuration loading and access.

This module provides dataclasses for the optional ``npmstage.toml`` file with
full type safety and validation. Every value has a default, so a project
without a config file stages the packages with the built-in layout.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "StageConfig",
    "PackageConfig",
    "PathsConfig",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_PACKAGE_NAME",
    "DEFAULT_PLATFORMS",
    "DEFAULT_BRANCH_SUFFIXES",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "npmstage.toml"

DEFAULT_PACKAGE_NAME = "@byebyecode/ccline-88cc"

# One entry per published binary (os-arch[-libc]).
DEFAULT_PLATFORMS: tuple[str, ...] = (
    "darwin-x64",
    "darwin-arm64",
    "linux-x64",
    "linux-x64-musl",
    "win32-x64",
)

# Tag suffixes used only to tell parallel release branches apart.
DEFAULT_BRANCH_SUFFIXES: tuple[str, ...] = ("88code", "yescode")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """Package naming and the platform catalog.

    Raises:
        ValueError: If the platform list is empty or has duplicates.
    """

    name: str = DEFAULT_PACKAGE_NAME
    platform_prefix: str = f"{DEFAULT_PACKAGE_NAME}-"
    branch_suffixes: tuple[str, ...] = DEFAULT_BRANCH_SUFFIXES
    platforms: tuple[str, ...] = DEFAULT_PLATFORMS

    def __post_init__(self) -> None:
        if not self.platforms:
            raise ValueError("package.platforms must not be empty")
        if len(set(self.platforms)) != len(self.platforms):
            raise ValueError(f"package.platforms contains duplicates: {list(self.platforms)}")


def _overlaps(a: str, b: str) -> bool:
    """True if a and b are the same directory or one contains the other."""
    pa = PurePath(os.path.normpath(a))
    pb = PurePath(os.path.normpath(b))
    return pa == pb or pa in pb.parents or pb in pa.parents


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the project root.

    The staging root must stay apart from both source trees so a run never
    writes over its own inputs.

    Raises:
        ValueError: If ``out`` overlaps ``platforms`` or ``main``.
    """

    platforms: str = "npm/platforms"
    main: str = "npm/main"
    out: str = "npm-publish"

    def __post_init__(self) -> None:
        for key, source in (("platforms", self.platforms), ("main", self.main)):
            if _overlaps(self.out, source):
                raise ValueError(f"paths.out {self.out!r} overlaps paths.{key} {source!r}")


@dataclass(frozen=True, slots=True)
class StageConfig:
    """Main configuration container."""

    package: PackageConfig = field(default_factory=PackageConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> StageConfig:
        """Create StageConfig from a mapping (parsed TOML).

        Raises:
            ValueError: If the platform list or the paths are invalid.
        """
        package: StrDict = get_table(data, "package") or {}
        paths: StrDict = get_table(data, "paths") or {}

        name = get_str(package, "name") or DEFAULT_PACKAGE_NAME
        platforms = DEFAULT_PLATFORMS
        if "platforms" in package:
            listed = get_str_list(package, "platforms")
            if listed is None:
                raise ValueError("package.platforms must be a list of non-empty strings")
            platforms = tuple(listed)
        suffixes = get_str_list(package, "branch_suffixes")

        return cls(
            package=PackageConfig(
                name=name,
                platform_prefix=get_str(package, "platform_prefix") or f"{name}-",
                branch_suffixes=(
                    tuple(suffixes) if suffixes is not None else DEFAULT_BRANCH_SUFFIXES
                ),
                platforms=platforms,
            ),
            paths=PathsConfig(
                platforms=get_str(paths, "platforms") or "npm/platforms",
                main=get_str(paths, "main") or "npm/main",
                out=get_str(paths, "out") or "npm-publish",
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
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
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[StageConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to npmstage.toml

    Returns:
        Ok(StageConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(StageConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[StageConfig, ConfigError]:
    """Load config if the file exists, otherwise return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(StageConfig())
    return load_config(path)
