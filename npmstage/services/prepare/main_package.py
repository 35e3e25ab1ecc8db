"""Main package composition.

The main package source tree is copied verbatim into the staging area, then
its manifest is re-stamped so that the package version and every platform
entry in ``optionalDependencies`` equal the release version.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from npmstage.core.result import Err, Ok, Result
from npmstage.core.structured import StrDict, as_str_dict
from npmstage.output.console import ConsoleProtocol
from npmstage.platform.files import copy_tree
from npmstage.services.prepare.catalog import PlatformCatalog
from npmstage.services.prepare.errors import FilesystemError, ManifestInvalid
from npmstage.services.prepare.manifest import (
    MANIFEST_FILENAME,
    OPTIONAL_DEPENDENCIES,
    load_manifest,
    manifest_name,
    stamp_version,
    write_manifest,
)


@dataclass(frozen=True, slots=True)
class DependencySync:
    """What happened to optionalDependencies during the rewrite."""

    rewritten: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    # Prefix matches that the catalog does not know about.
    unexpected: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StagedMain:
    name: str
    version: str
    out_dir: Path
    sync: DependencySync = field(default_factory=DependencySync)


def sync_optional_dependencies(
    manifest: StrDict,
    *,
    catalog: PlatformCatalog,
    version: str,
    path: Path,
) -> Result[tuple[StrDict, DependencySync], ManifestInvalid]:
    """Pin platform entries in optionalDependencies to version.

    Every key matching the platform prefix is rewritten; unrelated optional
    dependencies keep their ranges. Catalog packages missing from the mapping
    are appended so each platform has exactly one entry.
    """
    raw = manifest.get(OPTIONAL_DEPENDENCIES)
    if raw is None:
        deps: StrDict = {}
    else:
        parsed = as_str_dict(raw)
        if parsed is None:
            reason = f"{OPTIONAL_DEPENDENCIES} must be an object"
            return Err(ManifestInvalid(path=path, reason=reason))
        deps = dict(parsed)

    known = set(catalog.package_names)
    rewritten: list[str] = []
    unexpected: list[str] = []
    for name in deps:
        if catalog.is_platform_package(name):
            deps[name] = version
            rewritten.append(name)
            if name not in known:
                unexpected.append(name)

    added: list[str] = []
    for target in catalog:
        if target.package_name not in deps:
            deps[target.package_name] = version
            added.append(target.package_name)

    out = dict(manifest)
    out[OPTIONAL_DEPENDENCIES] = deps
    return Ok(
        (
            out,
            DependencySync(
                rewritten=tuple(rewritten), added=tuple(added), unexpected=tuple(unexpected)
            ),
        )
    )


def _copy_error(e: OSError, *, fallback: Path) -> FilesystemError:
    # shutil.Error carries a list of (src, dst, why) for every failed entry
    if isinstance(e, shutil.Error) and e.args and isinstance(e.args[0], list) and e.args[0]:
        src, dst, why = e.args[0][0]
        return FilesystemError(path=Path(dst), operation="copy", reason=f"from {src}: {why}")
    path = Path(e.filename) if e.filename else fallback
    return FilesystemError(path=path, operation="copy", reason=e.strerror or str(e))


def stage_main(
    *,
    source_dir: Path,
    out_dir: Path,
    catalog: PlatformCatalog,
    version: str,
    console: ConsoleProtocol,
) -> Result[StagedMain, ManifestInvalid | FilesystemError]:
    try:
        copy_tree(source_dir, out_dir)
    except OSError as e:
        return Err(_copy_error(e, fallback=source_dir))

    manifest_path = out_dir / MANIFEST_FILENAME
    loaded = load_manifest(manifest_path)
    if isinstance(loaded, Err):
        return Err(ManifestInvalid(path=manifest_path, reason=loaded.error))

    synced = sync_optional_dependencies(
        stamp_version(loaded.value, version),
        catalog=catalog,
        version=version,
        path=manifest_path,
    )
    if isinstance(synced, Err):
        return synced
    manifest, sync = synced.value

    for name in sync.unexpected:
        console.warning(
            f"{name} matches the platform prefix but is not in the catalog; pinned to {version}"
        )
    for name in sync.added:
        console.warning(f"{name} was missing from {OPTIONAL_DEPENDENCIES}; added at {version}")

    written = write_manifest(manifest_path, manifest)
    if isinstance(written, Err):
        return written

    name = manifest_name(manifest, default=out_dir.name)
    console.success(f"{name} v{version}")
    return Ok(StagedMain(name=name, version=version, out_dir=out_dir, sync=sync))
