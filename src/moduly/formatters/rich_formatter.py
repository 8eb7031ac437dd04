"""Rich terminal formatter for Moduly."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import ProjectReport
from ..security.models import Severity
from .base import BaseFormatter

_SEVERITY_STYLES = {
    Severity.CRITICAL: "red bold",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}

TOP_FILES = 10
TOP_FINDINGS = 20


def _score_label(score: int) -> str:
    if score >= 80:
        return f"[green bold]{score}[/green bold]"
    elif score >= 50:
        return f"[yellow bold]{score}[/yellow bold]"
    else:
        return f"[red bold]{score}[/red bold]"


def _severity_label(severity: Severity) -> str:
    style = _SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"


def _location(file: Optional[str], line: Optional[int]) -> str:
    if file is None:
        return "-"
    return f"{file}:{line}" if line is not None else file


class RichFormatter(BaseFormatter):
    """Summary panel followed by per-signal tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, report: ProjectReport) -> None:
        self._print_summary(report)
        self._print_files(report)
        self._print_hotspots(report)
        self._print_packages(report)
        self._print_findings(report)
        self._print_performance(report)

    def format(self, report: ProjectReport) -> str:
        with self.console.capture() as capture:
            self.render(report)
        return capture.get()

    # -- private helpers --

    def _print_summary(self, report: ProjectReport) -> None:
        stats = report.stats
        graph = report.dependencies
        languages = ", ".join(
            f"{ext} ({count})"
            for ext, count in sorted(stats.languages.items(), key=lambda kv: kv[1], reverse=True)
        )
        summary = (
            f"Health score: {_score_label(report.score)}/100\n"
            f"Files: [bold]{stats.total_files}[/bold]  |  "
            f"Lines: [bold]{stats.total_loc}[/bold] "
            f"([cyan]{stats.total_code_lines}[/cyan] code, "
            f"[cyan]{stats.total_comment_lines}[/cyan] comments)\n"
            f"Modules: [bold]{len(graph.nodes)}[/bold]  |  "
            f"Imports: [bold]{len(graph.edges)}[/bold]  |  "
            f"Coupling: [blue]{graph.coupling_ratio:.2f}[/blue]\n"
            f"Languages: [cyan]{languages or 'none'}[/cyan]"
        )
        self.console.print(
            Panel(summary, title=f"[bold cyan]{report.project_name}[/bold cyan]", expand=False)
        )
        self.console.print()

    def _print_files(self, report: ProjectReport) -> None:
        files = report.stats.file_list[:TOP_FILES]
        if not files:
            return
        table = Table(title="Largest Files", expand=True)
        table.add_column("File", style="yellow", ratio=3)
        table.add_column("Code", justify="right")
        table.add_column("Comments", justify="right")
        table.add_column("Total", justify="right", style="dim")
        for f in files:
            table.add_row(
                f.path, str(f.loc.code_lines), str(f.loc.comment_lines), str(f.loc.total_lines)
            )
        self.console.print(table)
        self.console.print()

    def _print_hotspots(self, report: ProjectReport) -> None:
        if not report.hotspots:
            return
        table = Table(title="Hotspots", expand=True)
        table.add_column("File", style="yellow", ratio=3)
        table.add_column("Commits", justify="right")
        for h in report.hotspots:
            table.add_row(h.file, str(h.commits))
        self.console.print(table)
        self.console.print()

    def _print_packages(self, report: ProjectReport) -> None:
        usage = report.package_dependencies
        if not usage.dependencies and not usage.dev_dependencies:
            return

        self.console.print(
            f"[bold]Packages:[/bold] {len(usage.used)} used, "
            f"[yellow]{len(usage.unused)}[/yellow] unused, "
            f"[yellow]{len(usage.outdated)}[/yellow] floating ranges"
        )
        if usage.unused:
            self.console.print(f"  [red]-[/red] Unused: {', '.join(usage.unused)}")
        for pkg in usage.outdated:
            self.console.print(f"  [yellow]~[/yellow] {pkg.name} {pkg.current}")
        for suggestion in usage.suggestions:
            self.console.print(f"  [green]->[/green] {suggestion}")
        self.console.print()

    def _print_findings(self, report: ProjectReport) -> None:
        if not report.security:
            self.console.print("[green]No security findings[/green]")
            self.console.print()
            return

        shown = report.security[:TOP_FINDINGS]
        table = Table(title=f"Security Findings ({len(report.security)})", expand=True)
        table.add_column("Severity", width=10)
        table.add_column("Finding", style="bold", ratio=2)
        table.add_column("Location", style="yellow", ratio=2)
        table.add_column("Description", ratio=3)
        for finding in shown:
            table.add_row(
                _severity_label(finding.severity),
                finding.name,
                _location(finding.file, finding.line),
                finding.description,
            )
        self.console.print(table)
        if len(report.security) > len(shown):
            self.console.print(
                f"[dim]... and {len(report.security) - len(shown)} more (use --json)[/dim]"
            )
        self.console.print()

    def _print_performance(self, report: ProjectReport) -> None:
        perf = report.performance
        self.console.print(
            f"[bold]Performance:[/bold] bundle ~{perf.bundle_size}, "
            f"source {perf.source_size}, est. load {perf.load_time}"
        )
        for large in perf.large_files:
            self.console.print(f"  [yellow]![/yellow] {large.path} ({large.size}, {large.lines} lines)")
        for heavy in perf.heavy_dependencies:
            self.console.print(f"  [yellow]![/yellow] {heavy.name}: {heavy.reason}")
        self.console.print()
