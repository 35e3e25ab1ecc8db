from __future__ import annotations

from pathlib import Path

import typer

from npmstage.cli.commands._helpers import exit_on_prepare_error
from npmstage.cli.context import build_context
from npmstage.core.result import Err
from npmstage.services.prepare.service import PrepareService
from npmstage.services.prepare.version import TAG_REF_ENV


def prepare(
    version: str | None = typer.Argument(
        None, help="Release version (used when no tag ref is set), e.g. 1.0.0"
    ),
    tag_ref: str | None = typer.Option(
        None,
        "--tag-ref",
        envvar=TAG_REF_ENV,
        help="CI tag reference (refs/tags/v<version>); takes precedence over VERSION",
    ),
    root: Path | None = typer.Option(
        None, "--root", help="Project root (default: current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: <root>/npmstage.toml if present)"
    ),
) -> None:
    """Stage platform packages and the main package for publishing."""
    ctx = build_context(root=root, config_path=config)
    service = PrepareService(root=ctx.root, config=ctx.config, console=ctx.console)

    result = service.prepare(tag_ref=tag_ref, argument=version)
    if isinstance(result, Err):
        exit_on_prepare_error(result.error, ctx.console)
