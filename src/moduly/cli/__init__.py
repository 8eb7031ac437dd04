"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="moduly",
    help="Moduly - JavaScript/TypeScript project health analyzer",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Moduly[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Analyze module structure, package usage and security of JS/TS projects."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .ai import ai as _ai  # noqa: F401, E402
