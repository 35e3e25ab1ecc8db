from __future__ import annotations

import typer

from npmstage import __version__
from npmstage.cli.commands.prepare import prepare
from npmstage.cli.commands.verify import verify


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Stage npm packages with per-platform optional dependencies.",
)


app.command()(prepare)
app.command()(verify)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    pass


def main() -> None:
    app()
