from __future__ import annotations

import json
from pathlib import Path

from npmstage.core.config import StageConfig
from npmstage.core.result import Err, Ok
from npmstage.output.console import MockConsole
from npmstage.services.prepare.catalog import PlatformCatalog
from npmstage.services.prepare.errors import TemplateReadError
from npmstage.services.prepare.platforms import stage_platform, stage_platforms


def _load(path: Path) -> dict[str, object]:
    return json.loads(path.read_text(encoding="utf-8"))


def test_stage_platform_only_changes_version(project: Path) -> None:
    catalog = PlatformCatalog.from_config(StageConfig(), root=project)
    target = next(t for t in catalog if t.id == "linux-x64-musl")
    template = _load(target.template_manifest)

    result = stage_platform(target, version="1.2.3")

    assert isinstance(result, Ok)
    assert result.value.name == "@byebyecode/ccline-88cc-linux-x64-musl"
    staged = _load(target.out_manifest)
    assert staged["version"] == "1.2.3"
    assert list(staged) == list(template)
    assert {k: v for k, v in staged.items() if k != "version"} == {
        k: v for k, v in template.items() if k != "version"
    }
    assert target.out_manifest.read_text(encoding="utf-8").endswith("}\n")


def test_stage_platform_leaves_template_untouched(project: Path) -> None:
    catalog = PlatformCatalog.from_config(StageConfig(), root=project)
    target = next(iter(catalog))
    before = target.template_manifest.read_bytes()

    stage_platform(target, version="3.0.0")

    assert target.template_manifest.read_bytes() == before


def test_stage_platforms_emits_one_line_per_platform(project: Path) -> None:
    console = MockConsole()
    catalog = PlatformCatalog.from_config(StageConfig(), root=project)

    result = stage_platforms(catalog, version="1.0.0", console=console)

    assert isinstance(result, Ok)
    assert len(result.value) == len(catalog)
    assert console.messages == [f"OK {name} v1.0.0" for name in catalog.package_names]


def test_missing_template_is_fatal(project: Path) -> None:
    (project / "npm" / "platforms" / "win32-x64" / "package.json").unlink()
    catalog = PlatformCatalog.from_config(StageConfig(), root=project)

    result = stage_platforms(catalog, version="1.0.0", console=MockConsole())

    assert isinstance(result, Err)
    assert isinstance(result.error, TemplateReadError)
    assert result.error.platform == "win32-x64"
    assert result.error.reason == "file not found"


def test_unparseable_template_is_fatal(project: Path) -> None:
    (project / "npm" / "platforms" / "darwin-x64" / "package.json").write_text("{")
    catalog = PlatformCatalog.from_config(StageConfig(), root=project)

    result = stage_platforms(catalog, version="1.0.0", console=MockConsole())

    assert isinstance(result, Err)
    assert isinstance(result.error, TemplateReadError)
    assert result.error.platform == "darwin-x64"
