"""Consistency check of an already staged tree.

Used as a gate before publishing: the main manifest and every platform
manifest must agree on a single version.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from npmstage.core.result import Err
from npmstage.core.structured import as_str_dict
from npmstage.services.prepare.catalog import PlatformCatalog
from npmstage.services.prepare.manifest import (
    MANIFEST_FILENAME,
    OPTIONAL_DEPENDENCIES,
    load_manifest,
)


def _empty_issues() -> list[str]:
    return []


@dataclass
class VerifyReport:
    version: str | None = None
    issues: list[str] = field(default_factory=_empty_issues)

    @property
    def ok(self) -> bool:
        return self.version is not None and not self.issues


def verify_staged(
    *,
    catalog: PlatformCatalog,
    main_out: Path,
    expected_version: str | None = None,
) -> VerifyReport:
    """Check a staged tree against the catalog.

    Without ``expected_version`` the main manifest's own version is the
    reference.
    """
    report = VerifyReport(version=expected_version)

    main_path = main_out / MANIFEST_FILENAME
    loaded = load_manifest(main_path)
    if isinstance(loaded, Err):
        report.issues.append(f"{main_path}: {loaded.error}")
        return report
    main = loaded.value

    main_version = main.get("version")
    if report.version is None:
        if not isinstance(main_version, str) or not main_version:
            report.issues.append(f"{main_path}: missing version")
            return report
        report.version = main_version
    elif main_version != report.version:
        report.issues.append(f"{main_path}: version {main_version!r} != {report.version!r}")

    deps = as_str_dict(main.get(OPTIONAL_DEPENDENCIES)) or {}
    for target in catalog:
        pinned = deps.get(target.package_name)
        if pinned is None:
            report.issues.append(f"{OPTIONAL_DEPENDENCIES} is missing {target.package_name}")
        elif pinned != report.version:
            report.issues.append(
                f"{OPTIONAL_DEPENDENCIES}[{target.package_name}] is {pinned!r}, "
                f"expected {report.version!r}"
            )

        platform = load_manifest(target.out_manifest)
        if isinstance(platform, Err):
            report.issues.append(f"{target.out_manifest}: {platform.error}")
            continue
        if platform.value.get("version") != report.version:
            report.issues.append(
                f"{target.out_manifest}: version {platform.value.get('version')!r} "
                f"!= {report.version!r}"
            )

    return report
