"""Release staging for the main package and its platform packages."""

from __future__ import annotations

from .catalog import PlatformCatalog, PlatformTarget
from .errors import (
    FilesystemError,
    InvalidVersion,
    ManifestInvalid,
    MissingVersion,
    PrepareError,
    TemplateReadError,
)
from .service import PrepareReport, PrepareService
from .version import ResolvedVersion, resolve_version, strip_branch_suffix
from .verify import VerifyReport, verify_staged

__all__ = [
    "FilesystemError",
    "InvalidVersion",
    "ManifestInvalid",
    "MissingVersion",
    "PlatformCatalog",
    "PlatformTarget",
    "PrepareError",
    "PrepareReport",
    "PrepareService",
    "ResolvedVersion",
    "TemplateReadError",
    "VerifyReport",
    "resolve_version",
    "strip_branch_suffix",
    "verify_staged",
]
