"""Release staging orchestration.

Resolve the version once, then stage every platform package followed by the
main package. The first failure stops the run; re-running overwrites the
staged tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from npmstage.core.config import StageConfig
from npmstage.core.result import Err, Ok, Result
from npmstage.output.console import ConsoleProtocol, Style
from npmstage.services.prepare.catalog import PlatformCatalog
from npmstage.services.prepare.errors import PrepareError
from npmstage.services.prepare.main_package import StagedMain, stage_main
from npmstage.services.prepare.platforms import StagedPackage, stage_platforms
from npmstage.services.prepare.version import (
    TAG_REF_PREFIX,
    ResolvedVersion,
    resolve_version,
)

MAIN_OUT_DIRNAME = "main"

NEXT_STEPS: tuple[str, ...] = (
    "Copy binaries to platform directories",
    "Publish platform packages first",
    "Publish main package last",
)


@dataclass(frozen=True, slots=True)
class PrepareReport:
    version: ResolvedVersion
    platforms: tuple[StagedPackage, ...]
    main: StagedMain


class PrepareService:
    def __init__(self, *, root: Path, config: StageConfig, console: ConsoleProtocol) -> None:
        self._root = root
        self._config = config
        self._console = console
        self._catalog = PlatformCatalog.from_config(config, root=root)

    @property
    def catalog(self) -> PlatformCatalog:
        return self._catalog

    @property
    def out_root(self) -> Path:
        return self._root / self._config.paths.out

    @property
    def main_source(self) -> Path:
        return self._root / self._config.paths.main

    @property
    def main_out(self) -> Path:
        return self.out_root / MAIN_OUT_DIRNAME

    def resolve(
        self, *, tag_ref: str | None, argument: str | None
    ) -> Result[ResolvedVersion, PrepareError]:
        ref = (tag_ref or "").strip()
        if ref and not ref.startswith(TAG_REF_PREFIX):
            self._console.warning(f"ignoring non-tag ref: {ref}")

        result = resolve_version(
            tag_ref=tag_ref,
            argument=argument,
            branch_suffixes=self._config.package.branch_suffixes,
        )
        if isinstance(result, Ok) and result.value.was_normalized:
            resolved = result.value
            self._console.info(f"tag suffix removed: {resolved.original} -> {resolved.value}")
        return result

    def stage(self, version: ResolvedVersion) -> Result[PrepareReport, PrepareError]:
        console = self._console
        console.header(f"Preparing packages for version {version.value}")

        platforms = stage_platforms(self._catalog, version=version.value, console=console)
        if isinstance(platforms, Err):
            return platforms

        main = stage_main(
            source_dir=self.main_source,
            out_dir=self.main_out,
            catalog=self._catalog,
            version=version.value,
            console=console,
        )
        if isinstance(main, Err):
            return main

        return Ok(
            PrepareReport(version=version, platforms=tuple(platforms.value), main=main.value)
        )

    def prepare(
        self, *, tag_ref: str | None, argument: str | None
    ) -> Result[PrepareReport, PrepareError]:
        """Resolve the version and stage all packages.

        Nothing is written when the version cannot be resolved.
        """
        resolved = self.resolve(tag_ref=tag_ref, argument=argument)
        if isinstance(resolved, Err):
            return resolved

        report = self.stage(resolved.value)
        if isinstance(report, Ok):
            self.print_summary(report.value)
        return report

    def print_summary(self, report: PrepareReport) -> None:
        console = self._console
        console.newline()
        console.print(
            f"All {len(report.platforms) + 1} packages prepared for version "
            f"{report.version.value} in {self.out_root}",
            Style.SUCCESS,
        )
        console.header("Next steps")
        for i, step in enumerate(NEXT_STEPS, start=1):
            console.print(f"{i}. {step}", Style.DIM)
