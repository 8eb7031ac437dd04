"""Analysis engine: per-file work on a worker pool, then a single-writer reduction.

The engine is a pure function of its inputs (file contents, manifest,
audit findings, hotspots). It never touches the filesystem, git or npm;
``moduly.api`` gathers those inputs.

Per-file results are merged in enumeration order, so the
report does not depend on which worker finishes first.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import ParsingError
from ..graph.builder import build_dependency_graph
from ..graph.models import DependencyGraph
from ..graph.resolver import resolve_specifier
from ..logging_config import get_logger
from ..models import PerformanceMetrics, ProjectFile, ProjectReport, ProjectStats
from ..packages.classifier import classify_packages
from ..packages.models import PackageManifest, PackageUsage
from ..scanning.imports import extract_imports_from_tree, is_relative_specifier
from ..scanning.languages import detect_language
from ..scanning.loc import LocStats, count_lines
from ..scanning.source import SourceFile
from ..scanning.treesitter_parser import TreeSitterParser
from ..scoring import compute_health_score
from ..security.code_scan import scan_secrets, scan_tree
from ..security.models import SecurityFinding, sort_findings
from ..temporal.models import Hotspot

logger = get_logger(__name__)

# CPU count capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass
class FileAnalysis:
    """Everything learned from one file. ``loc`` is None for unreadable files."""

    path: str
    loc: Optional[LocStats] = None
    local_imports: list[str] = field(default_factory=list)
    external_imports: list[str] = field(default_factory=list)
    findings: list[SecurityFinding] = field(default_factory=list)


@dataclass
class SourceAnalysis:
    """Aggregated per-file results."""

    stats: ProjectStats
    graph: DependencyGraph
    packages: PackageUsage
    findings: list[SecurityFinding]


class AnalysisEngine:
    """Runs import extraction, resolution and code scanning over all files."""

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self.config = config or AnalysisConfig()
        self._parser = TreeSitterParser()
        self._max_workers = self.config.workers or _DEFAULT_WORKERS

    def analyze_file(self, source: SourceFile, project_files: frozenset[str]) -> FileAnalysis:
        result = FileAnalysis(path=source.path)
        if source.text is None:
            return result

        result.loc = count_lines(source.text, source.extension)

        specifiers: list[str] = []
        language = detect_language(source.path)
        if language is not None:
            try:
                tree = self._parser.parse_text(source.text, language, source.path)
            except ParsingError as e:
                logger.debug("Skipping syntax analysis for %s: %s", source.path, e)
            else:
                specifiers = extract_imports_from_tree(tree)
                result.findings.extend(scan_tree(tree, source.path))

        result.findings.extend(scan_secrets(source.text, source.path))

        for specifier in specifiers:
            if is_relative_specifier(specifier):
                target = resolve_specifier(specifier, source.path, project_files)
                if target is not None:
                    result.local_imports.append(target)
            else:
                result.external_imports.append(specifier)

        return result

    def analyze_files(self, sources: Sequence[SourceFile]) -> list[FileAnalysis]:
        """Analyze every file, returning results in input order."""
        project_files = frozenset(s.path for s in sources)
        results: list[Optional[FileAnalysis]] = [None] * len(sources)

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {
                pool.submit(self.analyze_file, source, project_files): index
                for index, source in enumerate(sources)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        return [r for r in results if r is not None]

    def analyze_sources(
        self, sources: Sequence[SourceFile], manifest: Optional[PackageManifest]
    ) -> SourceAnalysis:
        per_file = self.analyze_files(sources)

        stats = ProjectStats(total_files=len(sources))
        for source, item in zip(sources, per_file):
            stats.languages[source.extension] = stats.languages.get(source.extension, 0) + 1
            if item.loc is None:
                continue
            stats.total_loc += item.loc.total_lines
            stats.total_code_lines += item.loc.code_lines
            stats.total_comment_lines += item.loc.comment_lines
            stats.total_blank_lines += item.loc.blank_lines
            stats.file_list.append(
                ProjectFile(
                    path=source.path, size=source.size, extension=source.extension, loc=item.loc
                )
            )
        # Stable: equal sizes keep enumeration order
        stats.file_list.sort(key=lambda f: f.lines_of_code, reverse=True)

        graph = build_dependency_graph(
            [s.path for s in sources],
            [(item.path, item.local_imports) for item in per_file],
            max_nodes=self.config.max_nodes,
            max_edges=self.config.max_edges,
        )

        packages = classify_packages(
            manifest, (name for item in per_file for name in item.external_imports)
        )

        findings = [f for item in per_file for f in item.findings]

        logger.debug(
            "Analyzed %d files: %d edges, %d code findings",
            len(per_file),
            len(graph.edges),
            len(findings),
        )
        return SourceAnalysis(stats=stats, graph=graph, packages=packages, findings=findings)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble_report(
    project_name: str,
    timestamp: str,
    analysis: SourceAnalysis,
    hotspots: Sequence[Hotspot],
    audit_findings: Sequence[SecurityFinding],
    performance: PerformanceMetrics,
    config: Optional[AnalysisConfig] = None,
) -> ProjectReport:
    """Merge all signals into the final report and score it.

    Audit findings precede code-scan findings before the stable severity
    sort, so within a severity level audit results come first.
    """
    config = config or AnalysisConfig()
    findings = sort_findings([*audit_findings, *analysis.findings])
    score = compute_health_score(
        analysis.stats,
        hotspots,
        analysis.graph,
        len(analysis.packages.unused),
        findings,
        config.weights,
    )
    return ProjectReport(
        project_name=project_name,
        timestamp=timestamp,
        stats=analysis.stats,
        hotspots=list(hotspots),
        dependencies=analysis.graph,
        package_dependencies=analysis.packages,
        security=findings,
        performance=performance,
        score=score,
    )
