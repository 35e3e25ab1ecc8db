from __future__ import annotations

from pathlib import Path

import typer

from npmstage.cli.context import build_context
from npmstage.core.errors import ErrorCode
from npmstage.output.console import Style
from npmstage.services.prepare.catalog import PlatformCatalog
from npmstage.services.prepare.service import MAIN_OUT_DIRNAME
from npmstage.services.prepare.verify import verify_staged


def verify(
    expect: str | None = typer.Option(
        None, "--expect", help="Expected version (default: the staged main manifest's)"
    ),
    root: Path | None = typer.Option(
        None, "--root", help="Project root (default: current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: <root>/npmstage.toml if present)"
    ),
) -> None:
    """Check that a staged tree is consistent before publishing."""
    ctx = build_context(root=root, config_path=config)
    catalog = PlatformCatalog.from_config(ctx.config, root=ctx.root)
    out_root = ctx.root / ctx.config.paths.out

    report = verify_staged(
        catalog=catalog,
        main_out=out_root / MAIN_OUT_DIRNAME,
        expected_version=expect,
    )

    ctx.console.print(f"staging: {out_root}", Style.DIM)
    for issue in report.issues:
        ctx.console.error(issue)

    if not report.ok:
        raise typer.Exit(code=int(ErrorCode.VERIFY_ERROR))

    ctx.console.success(f"{len(catalog) + 1} packages consistent at v{report.version}")
