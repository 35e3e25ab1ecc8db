"""Platform catalog.

The catalog is the only list of supported targets. Both the platform package
loop and the main manifest's optionalDependencies rewrite iterate over it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from npmstage.core.config import StageConfig


@dataclass(frozen=True, slots=True)
class PlatformTarget:
    """One os-arch[-libc] build target."""

    id: str
    package_name: str
    template_dir: Path
    out_dir: Path

    @property
    def template_manifest(self) -> Path:
        return self.template_dir / "package.json"

    @property
    def out_manifest(self) -> Path:
        return self.out_dir / "package.json"


@dataclass(frozen=True, slots=True)
class PlatformCatalog:
    prefix: str
    targets: tuple[PlatformTarget, ...]

    def __iter__(self) -> Iterator[PlatformTarget]:
        return iter(self.targets)

    def __len__(self) -> int:
        return len(self.targets)

    @property
    def package_names(self) -> tuple[str, ...]:
        return tuple(t.package_name for t in self.targets)

    def is_platform_package(self, name: str) -> bool:
        """Naming-convention check used on optionalDependencies keys."""
        return name.startswith(self.prefix)

    @classmethod
    def build(
        cls,
        *,
        platforms: tuple[str, ...],
        prefix: str,
        templates_root: Path,
        out_root: Path,
    ) -> PlatformCatalog:
        return cls(
            prefix=prefix,
            targets=tuple(
                PlatformTarget(
                    id=p,
                    package_name=f"{prefix}{p}",
                    template_dir=templates_root / p,
                    out_dir=out_root / p,
                )
                for p in platforms
            ),
        )

    @classmethod
    def from_config(cls, config: StageConfig, *, root: Path) -> PlatformCatalog:
        return cls.build(
            platforms=config.package.platforms,
            prefix=config.package.platform_prefix,
            templates_root=root / config.paths.platforms,
            out_root=root / config.paths.out,
        )
