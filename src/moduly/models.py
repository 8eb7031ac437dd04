"""Report data models.

``ProjectReport`` is the single object the analysis hands upward. It
serializes to plain dicts/JSON and rebuilds from them without loss: numbers
stay numeric, enums become their string values and list order is kept.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from .graph.models import DependencyGraph, Edge
from .packages.models import OutdatedPackage, PackageUsage
from .scanning.loc import LocStats
from .security.models import FindingSource, SecurityFinding, Severity
from .temporal.models import Hotspot


@dataclass
class ProjectFile:
    path: str
    size: int
    extension: str
    loc: LocStats = field(default_factory=LocStats)

    @property
    def lines_of_code(self) -> int:
        return self.loc.code_lines


@dataclass
class ProjectStats:
    """Aggregate line and file counts.

    ``total_files`` and ``languages`` count every enumerated file;
    ``file_list`` only holds readable files, largest code size first.
    """

    total_files: int = 0
    total_loc: int = 0
    total_code_lines: int = 0
    total_comment_lines: int = 0
    total_blank_lines: int = 0
    languages: dict[str, int] = field(default_factory=dict)
    file_list: list[ProjectFile] = field(default_factory=list)

    @property
    def comment_ratio(self) -> Optional[float]:
        if self.total_code_lines <= 0:
            return None
        return self.total_comment_lines / self.total_code_lines


@dataclass
class LargeFile:
    path: str
    size: str
    lines: int


@dataclass
class HeavyDependency:
    name: str
    reason: str


@dataclass
class PerformanceMetrics:
    bundle_size: str = "0B"
    source_size: str = "0B"
    load_time: str = "0.3s"
    dependency_count: int = 0
    large_files: list[LargeFile] = field(default_factory=list)
    heavy_dependencies: list[HeavyDependency] = field(default_factory=list)


@dataclass
class ProjectReport:
    project_name: str
    timestamp: str
    stats: ProjectStats
    hotspots: list[Hotspot]
    dependencies: DependencyGraph
    package_dependencies: PackageUsage
    security: list[SecurityFinding]
    performance: PerformanceMetrics
    score: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for finding in data["security"]:
            finding["severity"] = Severity(finding["severity"]).value
            finding["source"] = FindingSource(finding["source"]).value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectReport:
        stats = dict(data["stats"])
        stats["file_list"] = [
            ProjectFile(**{**f, "loc": LocStats(**f["loc"])}) for f in stats.get("file_list", [])
        ]

        graph = data["dependencies"]
        packages = dict(data["package_dependencies"])
        packages["outdated"] = [OutdatedPackage(**o) for o in packages.get("outdated", [])]

        performance = dict(data["performance"])
        performance["large_files"] = [LargeFile(**f) for f in performance.get("large_files", [])]
        performance["heavy_dependencies"] = [
            HeavyDependency(**h) for h in performance.get("heavy_dependencies", [])
        ]

        return cls(
            project_name=data["project_name"],
            timestamp=data["timestamp"],
            stats=ProjectStats(**stats),
            hotspots=[Hotspot(**h) for h in data.get("hotspots", [])],
            dependencies=DependencyGraph(
                nodes=list(graph.get("nodes", [])),
                edges=[Edge(**e) for e in graph.get("edges", [])],
            ),
            package_dependencies=PackageUsage(**packages),
            security=[
                SecurityFinding(
                    **{
                        **f,
                        "severity": Severity(f["severity"]),
                        "source": FindingSource(f["source"]),
                    }
                )
                for f in data.get("security", [])
            ],
            performance=PerformanceMetrics(**performance),
            score=data["score"],
        )
