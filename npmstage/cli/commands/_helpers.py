"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from npmstage.output.console import ConsoleProtocol
from npmstage.output.errors import prepare_error_exit_code, print_prepare_error
from npmstage.services.prepare.errors import PrepareError


def exit_on_prepare_error(error: PrepareError, console: ConsoleProtocol) -> NoReturn:
    """Print the diagnostic for error and exit with its mapped code."""
    print_prepare_error(error, console)
    raise typer.Exit(code=prepare_error_exit_code(error))
