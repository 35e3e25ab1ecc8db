from __future__ import annotations

import json
from pathlib import Path

from click.testing import Result
from typer.testing import CliRunner

from npmstage import __version__
from npmstage.cli.app import app
from npmstage.core.errors import ErrorCode

runner = CliRunner()


def _invoke(args: list[str], tag_ref: str | None = None) -> Result:
    return runner.invoke(app, args, env={"GITHUB_REF": tag_ref})


def test_version_flag() -> None:
    result = _invoke(["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_prepare_from_argument(project: Path) -> None:
    result = _invoke(["prepare", "1.3.0-beta", "--root", str(project)])

    assert result.exit_code == 0, result.output
    assert "@byebyecode/ccline-88cc-linux-x64-musl v1.3.0-beta" in result.output
    assert "Next steps" in result.output
    main = json.loads((project / "npm-publish/main/package.json").read_text(encoding="utf-8"))
    assert main["version"] == "1.3.0-beta"


def test_prepare_tag_ref_from_environment(project: Path) -> None:
    result = _invoke(
        ["prepare", "9.9.9", "--root", str(project)], tag_ref="refs/tags/v1.0.0-yescode"
    )

    assert result.exit_code == 0, result.output
    assert "1.0.0-yescode -> 1.0.0" in result.output
    staged = json.loads(
        (project / "npm-publish/win32-x64/package.json").read_text(encoding="utf-8")
    )
    assert staged["version"] == "1.0.0"


def test_prepare_without_version(project: Path) -> None:
    result = _invoke(["prepare", "--root", str(project)])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "version not provided" in result.output
    assert "npmstage prepare 1.0.0" in result.output
    assert not (project / "npm-publish").exists()


def test_prepare_missing_template(project: Path) -> None:
    (project / "npm/platforms/darwin-arm64/package.json").unlink()

    result = _invoke(["prepare", "1.0.0", "--root", str(project)])

    assert result.exit_code == int(ErrorCode.IO_ERROR)
    assert "darwin-arm64" in result.output


def test_prepare_reads_config_file(project: Path) -> None:
    (project / "npmstage.toml").write_text(
        '[package]\nplatforms = ["linux-x64"]\n\n[paths]\nout = "staging"\n', encoding="utf-8"
    )

    result = _invoke(["prepare", "1.0.0", "--root", str(project)])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in (project / "staging").iterdir()) == ["linux-x64", "main"]


def test_prepare_invalid_config(project: Path) -> None:
    (project / "npmstage.toml").write_text("[package\n", encoding="utf-8")

    result = _invoke(["prepare", "1.0.0", "--root", str(project)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert "Invalid TOML" in result.output


def test_prepare_explicit_config_must_exist(project: Path, tmp_path: Path) -> None:
    result = _invoke(
        ["prepare", "1.0.0", "--root", str(project), "--config", str(tmp_path / "none.toml")]
    )
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_prepare_refuses_out_over_templates(project: Path) -> None:
    (project / "npmstage.toml").write_text('[paths]\nout = "npm/platforms"\n', encoding="utf-8")
    templates = sorted((project / "npm/platforms").rglob("package.json"))
    before = {p: p.read_bytes() for p in templates}

    result = _invoke(["prepare", "9.9.9", "--root", str(project)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert "overlaps paths.platforms" in result.output
    assert {p: p.read_bytes() for p in templates} == before


def test_prepare_refuses_out_inside_main(project: Path) -> None:
    (project / "npmstage.toml").write_text('[paths]\nout = "npm/main/dist"\n', encoding="utf-8")

    result = _invoke(["prepare", "9.9.9", "--root", str(project)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert not (project / "npm/main/dist").exists()
