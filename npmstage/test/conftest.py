from __future__ import annotations

import json
from pathlib import Path

import pytest

from npmstage.core.config import DEFAULT_PACKAGE_NAME, DEFAULT_PLATFORMS


def write_json(path: Path, data: dict[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _platform_template(platform: str) -> dict[str, object]:
    os_name, arch, *libc = platform.split("-")
    data: dict[str, object] = {
        "name": f"{DEFAULT_PACKAGE_NAME}-{platform}",
        "version": "0.0.0",
        "description": f"ccline binary for {platform}",
        "os": [os_name],
        "cpu": [arch],
        "files": ["ccline.exe" if os_name == "win32" else "ccline"],
        "license": "MIT",
    }
    if libc:
        data["libc"] = libc
    return data


def _main_manifest() -> dict[str, object]:
    return {
        "name": DEFAULT_PACKAGE_NAME,
        "version": "0.0.0",
        "description": "Statusline for coding agents",
        "bin": {"ccline": "bin/ccline.js"},
        "scripts": {"postinstall": "node scripts/postinstall.js"},
        "optionalDependencies": {
            f"{DEFAULT_PACKAGE_NAME}-{p}": "0.0.0" for p in DEFAULT_PLATFORMS
        },
        "license": "MIT",
    }


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root laid out like npm/{platforms,main} with default config."""
    root = tmp_path / "project"
    for platform in DEFAULT_PLATFORMS:
        template = root / "npm" / "platforms" / platform / "package.json"
        write_json(template, _platform_template(platform))

    main = root / "npm" / "main"
    write_json(main / "package.json", _main_manifest())
    (main / "bin").mkdir(parents=True)
    (main / "bin" / "ccline.js").write_text("#!/usr/bin/env node\nrequire('../index');\n")
    (main / "scripts").mkdir()
    (main / "scripts" / "postinstall.js").write_text("console.log('ok');\n")
    (main / "README.md").write_text("# ccline: статус\n", encoding="utf-8")
    return root
