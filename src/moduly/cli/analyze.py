"""Main analysis command."""

from pathlib import Path
from typing import Optional

import typer

from ..api import analyze as run_analysis
from ..api import write_report
from ..exceptions import ModulyError
from ..formatters import JsonFormatter, RichFormatter
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Project root to analyze (default: current directory)",
        file_okay=False,
        dir_okay=True,
    ),
    report: bool = typer.Option(
        True,
        "--report/--no-report",
        help="Write .moduly/report.json into the project",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables",
    ),
    no_audit: bool = typer.Option(
        False,
        "--no-audit",
        help="Skip `npm audit`",
    ),
    no_git: bool = typer.Option(
        False,
        "--no-git",
        help="Skip git hotspot mining",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Analyze a JavaScript/TypeScript project and print its health report.

    [bold cyan]Examples:[/bold cyan]

      moduly analyze

      moduly analyze -C /path/to/project --json

      moduly analyze --no-audit --no-git --no-report
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)
    target = Path(path) if path else Path.cwd()

    try:
        settings = resolve_config(
            config=config,
            workers=workers,
            no_audit=no_audit,
            no_git=no_git,
            verbose=verbose,
            quiet=quiet,
        )
        result = run_analysis(target, config=settings)

        if report:
            out_path = write_report(target, result, settings.output_dir)
            logger.info("Report saved to %s", out_path)

        if json_output:
            JsonFormatter().render(result)
        else:
            RichFormatter(console).render(result)
            if report:
                console.print(f"[dim]Report saved to {out_path}[/dim]")

    except ModulyError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
