"""AI-mode toggle command."""

import typer

from ..exceptions import ModulyError
from ..settings import load_settings, save_settings
from . import app
from ._common import console

_STATES = ("on", "off", "status")


@app.command()
def ai(
    state: str = typer.Argument(..., help="on | off | status"),
):
    """Turn AI-assisted commit detection on or off, or show its state."""
    state = state.lower()
    if state not in _STATES:
        console.print(f"[red]Error:[/red] Invalid state {state!r}. Use one of: {', '.join(_STATES)}")
        raise typer.Exit(1)

    settings = load_settings()

    if state == "status":
        label = "[green]on[/green]" if settings.ai_enabled else "[yellow]off[/yellow]"
        console.print(f"AI mode: {label}")
        return

    settings.ai_enabled = state == "on"
    try:
        path = save_settings(settings)
    except ModulyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    label = "[green]enabled[/green]" if settings.ai_enabled else "[yellow]disabled[/yellow]"
    console.print(f"AI mode {label} [dim]({path})[/dim]")
