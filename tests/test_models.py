"""Tests for report serialization."""

import json

from moduly.graph.models import DependencyGraph, Edge
from moduly.models import (
    HeavyDependency,
    LargeFile,
    PerformanceMetrics,
    ProjectFile,
    ProjectReport,
    ProjectStats,
)
from moduly.packages.models import OutdatedPackage, PackageUsage
from moduly.scanning.loc import LocStats
from moduly.security.models import FindingSource, SecurityFinding, Severity
from moduly.temporal.models import Hotspot


def _report():
    return ProjectReport(
        project_name="demo-app",
        timestamp="2024-05-01T12:00:00.000Z",
        stats=ProjectStats(
            total_files=2,
            total_loc=12,
            total_code_lines=8,
            total_comment_lines=2,
            total_blank_lines=2,
            languages={".ts": 2},
            file_list=[ProjectFile("src/a.ts", 120, ".ts", LocStats(12, 8, 2, 2))],
        ),
        hotspots=[Hotspot("src/a.ts", 4)],
        dependencies=DependencyGraph(nodes=["src/a.ts", "src/b.ts"], edges=[Edge("src/a.ts", "src/b.ts")]),
        package_dependencies=PackageUsage(
            dependencies={"react": "18.2.0"},
            used=["react"],
            outdated=[OutdatedPackage("react", "18.2.0")],
            suggestions=["eslint - Add code quality linting"],
        ),
        security=[
            SecurityFinding(
                name="eval() Usage",
                severity=Severity.CRITICAL,
                description="...",
                source=FindingSource.CODE_SCAN,
                category="Code Injection",
                file="src/a.ts",
                line=3,
            )
        ],
        performance=PerformanceMetrics(
            bundle_size="120B",
            source_size="120B",
            load_time="0.3s",
            dependency_count=1,
            large_files=[LargeFile("src/a.ts", "120B", 12)],
            heavy_dependencies=[HeavyDependency("moment", "big")],
        ),
        score=88,
    )


class TestProjectReportSerialization:
    def test_enums_become_strings(self):
        data = _report().to_dict()
        finding = data["security"][0]
        assert finding["severity"] == "critical"
        assert finding["source"] == "code-scan"
        assert json.loads(json.dumps(data)) == data

    def test_edges_serialize_as_source_target(self):
        data = _report().to_dict()
        assert data["dependencies"]["edges"] == [{"source": "src/a.ts", "target": "src/b.ts"}]

    def test_round_trip(self):
        report = _report()
        rebuilt = ProjectReport.from_dict(json.loads(json.dumps(report.to_dict())))
        assert rebuilt == report
        assert rebuilt.security[0].severity is Severity.CRITICAL


class TestProjectStats:
    def test_comment_ratio(self):
        assert ProjectStats(total_code_lines=10, total_comment_lines=1).comment_ratio == 0.1
        assert ProjectStats().comment_ratio is None

    def test_lines_of_code_is_code_lines(self):
        assert ProjectFile("a.ts", 1, ".ts", LocStats(10, 6, 2, 2)).lines_of_code == 6
