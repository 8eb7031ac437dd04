"""Composite health score.

The score starts at 100 and subtracts independent deductions, each with
its own local cap:

    size        -10 if files > 200, -10 if total lines > 10,000
    volatility  -3 per hotspot with > 10 commits, capped at 15
    coupling    -15 if edges / max(nodes, 1) > 3
    packages    -2 per unused dependency, capped at 15
    security    -(10 critical + 5 high + 2 medium), capped at 30
    comments    -5 if comment/code ratio < 0.05 (only when code lines > 0)

The result is floored and clamped into [0, 100]. Every input is already
aggregated; nothing here walks files or trees.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .config import DEFAULT_WEIGHTS, ScoreWeights
from .graph.models import DependencyGraph
from .models import ProjectStats
from .security.models import SecurityFinding, Severity, severity_counts
from .temporal.models import Hotspot


@dataclass
class ScoreBreakdown:
    """Individual deductions, all non-negative."""

    size: float = 0
    lines: float = 0
    hotspots: float = 0
    coupling: float = 0
    unused_dependencies: float = 0
    security: float = 0
    comments: float = 0

    @property
    def total(self) -> float:
        return (
            self.size
            + self.lines
            + self.hotspots
            + self.coupling
            + self.unused_dependencies
            + self.security
            + self.comments
        )

    @property
    def score(self) -> int:
        return max(0, min(100, math.floor(100 - self.total)))


def score_breakdown(
    stats: ProjectStats,
    hotspots: Sequence[Hotspot],
    graph: DependencyGraph,
    unused_dependency_count: int,
    findings: Sequence[SecurityFinding],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    breakdown = ScoreBreakdown()

    if stats.total_files > weights.large_project_files:
        breakdown.size = weights.size_penalty
    if stats.total_loc > weights.large_project_loc:
        breakdown.lines = weights.loc_penalty

    active = sum(1 for h in hotspots if h.commits > weights.hotspot_commit_threshold)
    breakdown.hotspots = min(active * weights.hotspot_penalty, weights.hotspot_penalty_cap)

    if graph.coupling_ratio > weights.coupling_ratio_threshold:
        breakdown.coupling = weights.coupling_penalty

    breakdown.unused_dependencies = min(
        unused_dependency_count * weights.unused_dependency_penalty,
        weights.unused_dependency_penalty_cap,
    )

    counts = severity_counts(findings)
    raw_security = (
        counts[Severity.CRITICAL] * weights.critical_weight
        + counts[Severity.HIGH] * weights.high_weight
        + counts[Severity.MEDIUM] * weights.medium_weight
    )
    breakdown.security = min(raw_security, weights.security_penalty_cap)

    ratio = stats.comment_ratio
    if ratio is not None and ratio < weights.min_comment_ratio:
        breakdown.comments = weights.comment_penalty

    return breakdown


def compute_health_score(
    stats: ProjectStats,
    hotspots: Sequence[Hotspot],
    graph: DependencyGraph,
    unused_dependency_count: int,
    findings: Sequence[SecurityFinding],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Health score in [0, 100]; higher is healthier."""
    return score_breakdown(
        stats, hotspots, graph, unused_dependency_count, findings, weights
    ).score
