"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from npmstage.core.errors import ErrorCode
from npmstage.output.console import Style
from npmstage.services.prepare.errors import (
    FilesystemError,
    InvalidVersion,
    ManifestInvalid,
    MissingVersion,
    PrepareError,
    TemplateReadError,
)

if TYPE_CHECKING:
    from npmstage.output.console import ConsoleProtocol

__all__ = ["print_prepare_error", "prepare_error_exit_code"]


def print_prepare_error(error: PrepareError, console: ConsoleProtocol) -> None:
    """Print a staging error to console with appropriate formatting."""
    match error:
        case MissingVersion(env_var=env_var):
            console.error("version not provided")
            console.print(f"usage: {env_var}=refs/tags/v1.0.0 npmstage prepare", Style.DIM)
            console.print("   or: npmstage prepare 1.0.0", Style.DIM)
        case InvalidVersion(value=value, reason=reason):
            console.error(f"invalid version {value!r}: {reason}")
        case TemplateReadError(platform=platform, path=path, reason=reason):
            console.error(f"template for {platform} unreadable: {path} ({reason})")
            console.print("hint: every catalog platform needs a package.json template", Style.DIM)
        case ManifestInvalid(path=path, reason=reason):
            console.error(f"invalid main manifest: {path} ({reason})")
        case FilesystemError(path=path, operation=operation, reason=reason):
            console.error(f"{operation} failed: {path} ({reason})")


def prepare_error_exit_code(error: PrepareError) -> int:
    """Get exit code for a staging error."""
    match error:
        case MissingVersion() | InvalidVersion():
            return int(ErrorCode.USER_ERROR)
        case TemplateReadError() | ManifestInvalid() | FilesystemError():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.IO_ERROR)
