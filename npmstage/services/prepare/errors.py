from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class MissingVersion:
    env_var: str


@dataclass(frozen=True, slots=True)
class InvalidVersion:
    value: str
    reason: str


@dataclass(frozen=True, slots=True)
class TemplateReadError:
    platform: str
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ManifestInvalid:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class FilesystemError:
    path: Path
    operation: Literal["mkdir", "copy", "write"]
    reason: str


PrepareError = (
    MissingVersion | InvalidVersion | TemplateReadError | ManifestInvalid | FilesystemError
)
