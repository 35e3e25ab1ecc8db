from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from npmstage.core.result import Err, Ok, Result
from npmstage.output.console import ConsoleProtocol
from npmstage.services.prepare.catalog import PlatformCatalog, PlatformTarget
from npmstage.services.prepare.errors import FilesystemError, TemplateReadError
from npmstage.services.prepare.manifest import load_manifest, stamp_version, write_manifest


@dataclass(frozen=True, slots=True)
class StagedPackage:
    name: str
    version: str
    out_dir: Path


def stage_platform(
    target: PlatformTarget, *, version: str
) -> Result[StagedPackage, TemplateReadError | FilesystemError]:
    """Write the version-stamped template manifest for one platform."""
    try:
        target.out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(FilesystemError(path=target.out_dir, operation="mkdir", reason=str(e)))

    loaded = load_manifest(target.template_manifest)
    if isinstance(loaded, Err):
        return Err(
            TemplateReadError(
                platform=target.id, path=target.template_manifest, reason=loaded.error
            )
        )

    written = write_manifest(target.out_manifest, stamp_version(loaded.value, version))
    if isinstance(written, Err):
        return written

    return Ok(StagedPackage(name=target.package_name, version=version, out_dir=target.out_dir))


def stage_platforms(
    catalog: PlatformCatalog,
    *,
    version: str,
    console: ConsoleProtocol,
) -> Result[list[StagedPackage], TemplateReadError | FilesystemError]:
    """Stage every catalog platform, stopping at the first failure."""
    staged: list[StagedPackage] = []
    for target in catalog:
        result = stage_platform(target, version=version)
        if isinstance(result, Err):
            return result
        staged.append(result.value)
        console.success(f"{result.value.name} v{version}")
    return Ok(staged)
