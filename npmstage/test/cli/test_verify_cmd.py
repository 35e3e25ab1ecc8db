from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from npmstage.cli.app import app
from npmstage.core.errors import ErrorCode

runner = CliRunner()


def test_verify_after_prepare(project: Path) -> None:
    env = {"GITHUB_REF": None}
    assert runner.invoke(app, ["prepare", "1.0.0", "--root", str(project)], env=env).exit_code == 0

    result = runner.invoke(app, ["verify", "--root", str(project), "--expect", "1.0.0"], env=env)

    assert result.exit_code == 0, result.output
    assert "6 packages consistent at v1.0.0" in result.output


def test_verify_reports_drift(project: Path) -> None:
    env = {"GITHUB_REF": None}
    runner.invoke(app, ["prepare", "1.0.0", "--root", str(project)], env=env)
    main_path = project / "npm-publish/main/package.json"
    main = json.loads(main_path.read_text(encoding="utf-8"))
    main["optionalDependencies"]["@byebyecode/ccline-88cc-linux-x64"] = "0.1.0"
    main_path.write_text(json.dumps(main), encoding="utf-8")

    result = runner.invoke(app, ["verify", "--root", str(project)], env=env)

    assert result.exit_code == int(ErrorCode.VERIFY_ERROR)
    assert "ccline-88cc-linux-x64" in result.output


def test_verify_nothing_staged(project: Path) -> None:
    result = runner.invoke(app, ["verify", "--root", str(project)])
    assert result.exit_code == int(ErrorCode.VERIFY_ERROR)
