"""Tests for the formatters package."""

import json

import pytest
from rich.console import Console

from moduly.formatters import JsonFormatter, RichFormatter, get_formatter
from moduly.graph.models import DependencyGraph, Edge
from moduly.models import PerformanceMetrics, ProjectReport, ProjectStats
from moduly.packages.models import PackageUsage
from moduly.security.models import FindingSource, SecurityFinding, Severity
from moduly.temporal.models import Hotspot


def _make_report(findings=()):
    """Create a minimal ProjectReport for testing."""
    return ProjectReport(
        project_name="shop-frontend",
        timestamp="2024-05-01T12:00:00.000Z",
        stats=ProjectStats(total_files=2, total_loc=40, total_code_lines=30, languages={".ts": 2}),
        hotspots=[Hotspot("src/cart.ts", 14)],
        dependencies=DependencyGraph(nodes=["a.ts", "b.ts"], edges=[Edge("a.ts", "b.ts")]),
        package_dependencies=PackageUsage(
            dependencies={"react": "^18", "left-pad": "^1"}, used=["react"], unused=["left-pad"]
        ),
        security=list(findings),
        performance=PerformanceMetrics(),
        score=72,
    )


def _finding():
    return SecurityFinding(
        name="eval() Usage",
        severity=Severity.CRITICAL,
        description="eval() executes arbitrary code",
        source=FindingSource.CODE_SCAN,
        category="Code Injection",
        file="src/cart.ts",
        line=7,
    )


class TestGetFormatter:
    def test_known_names(self):
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("rich"), RichFormatter)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            get_formatter("xml")


class TestJsonFormatter:
    def test_format_is_report_dict(self):
        report = _make_report([_finding()])
        data = json.loads(JsonFormatter().format(report))
        assert data == report.to_dict()


class TestRichFormatter:
    def _render(self, report):
        console = Console(width=120, record=True, color_system=None)
        RichFormatter(console).render(report)
        return console.export_text()

    def test_summary(self):
        text = self._render(_make_report())
        assert "shop-frontend" in text
        assert "72" in text
        assert "src/cart.ts" in text
        assert "left-pad" in text
        assert "No security findings" in text

    def test_findings_table(self):
        text = self._render(_make_report([_finding()]))
        assert "eval() Usage" in text
        assert "src/cart.ts:7" in text
        assert "critical" in text

    def test_format_returns_text(self):
        formatter = RichFormatter(Console(width=120, color_system=None))
        assert "shop-frontend" in formatter.format(_make_report())
