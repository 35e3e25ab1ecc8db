from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from npmstage.core.config import CONFIG_FILENAME, StageConfig, load_config_or_default
from npmstage.core.errors import ErrorCode
from npmstage.core.result import Err
from npmstage.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: StageConfig
    console: ConsoleProtocol


def build_context(
    *,
    root: Path | None = None,
    config_path: Path | None = None,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    console = console or RichConsole()
    try:
        resolved_root = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --root: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not resolved_root.is_dir():
        console.error(f"project root not found: {resolved_root}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    path = config_path if config_path is not None else resolved_root / CONFIG_FILENAME
    if config_path is not None and not config_path.exists():
        console.error(f"config file not found: {config_path}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    result = load_config_or_default(path)
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(root=resolved_root, config=result.value, console=console)
