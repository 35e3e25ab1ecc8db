from __future__ import annotations

from pathlib import Path

from npmstage.core.config import DEFAULT_PLATFORMS, StageConfig
from npmstage.services.prepare.catalog import PlatformCatalog


def test_from_config_defaults(tmp_path: Path) -> None:
    catalog = PlatformCatalog.from_config(StageConfig(), root=tmp_path)

    assert len(catalog) == len(DEFAULT_PLATFORMS)
    assert [t.id for t in catalog] == list(DEFAULT_PLATFORMS)

    musl = next(t for t in catalog if t.id == "linux-x64-musl")
    assert musl.package_name == "@byebyecode/ccline-88cc-linux-x64-musl"
    assert musl.template_manifest == tmp_path / "npm/platforms/linux-x64-musl/package.json"
    assert musl.out_manifest == tmp_path / "npm-publish/linux-x64-musl/package.json"


def test_package_names_follow_prefix(tmp_path: Path) -> None:
    catalog = PlatformCatalog.build(
        platforms=("linux-x64", "win32-x64"),
        prefix="@acme/tool-",
        templates_root=tmp_path / "t",
        out_root=tmp_path / "o",
    )
    assert catalog.package_names == ("@acme/tool-linux-x64", "@acme/tool-win32-x64")
    assert catalog.is_platform_package("@acme/tool-darwin-arm64")
    assert not catalog.is_platform_package("@acme/other")

