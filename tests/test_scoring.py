"""Tests for the composite health score."""

import pytest

from moduly.config import ScoreWeights
from moduly.graph.models import DependencyGraph, Edge
from moduly.models import ProjectStats
from moduly.scoring import compute_health_score, score_breakdown
from moduly.security.models import FindingSource, SecurityFinding, Severity
from moduly.temporal.models import Hotspot


def _finding(severity):
    return SecurityFinding(
        name="x",
        severity=severity,
        description="",
        source=FindingSource.CODE_SCAN,
        category="Test",
    )


def _graph(nodes, edges):
    names = [f"f{i}.ts" for i in range(nodes)]
    return DependencyGraph(nodes=names, edges=[Edge(names[0], names[-1])] * edges)


def _stats(files=10, loc=100, code=80, comments=20):
    return ProjectStats(
        total_files=files, total_loc=loc, total_code_lines=code, total_comment_lines=comments
    )


def _score(stats=None, hotspots=(), graph=None, unused=0, findings=(), weights=None):
    return compute_health_score(
        stats or _stats(),
        list(hotspots),
        graph or DependencyGraph(),
        unused,
        list(findings),
        weights or ScoreWeights(),
    )


class TestHealthScore:
    def test_clean_project_scores_100(self):
        assert _score() == 100

    def test_size_penalties(self):
        assert _score(stats=_stats(files=201)) == 90
        assert _score(stats=_stats(files=200)) == 100
        assert _score(stats=_stats(files=201, loc=10_001)) == 80

    def test_coupling_threshold_is_strict(self):
        """30 edges over 10 nodes is exactly 3.0 and not penalized; 31 is."""
        assert _score(graph=_graph(10, 30)) == 100
        assert _score(graph=_graph(10, 31)) == 85

    def test_hotspots_only_count_above_threshold(self):
        hotspots = [Hotspot("a.ts", 11), Hotspot("b.ts", 10), Hotspot("c.ts", 50)]
        assert _score(hotspots=hotspots) == 94

    def test_hotspot_cap(self):
        hotspots = [Hotspot(f"{i}.ts", 100) for i in range(10)]
        assert _score(hotspots=hotspots) == 85

    def test_unused_dependency_cap(self):
        assert _score(unused=3) == 94
        assert _score(unused=20) == 85

    def test_security_weights(self):
        findings = [_finding(Severity.CRITICAL), _finding(Severity.HIGH), _finding(Severity.MEDIUM)]
        assert _score(findings=findings) == 83

    def test_low_findings_are_free(self):
        assert _score(findings=[_finding(Severity.LOW)] * 50) == 100

    def test_security_cap(self):
        assert _score(findings=[_finding(Severity.CRITICAL)] * 10) == 70
        mixed = [_finding(Severity.CRITICAL)] * 5 + [_finding(Severity.HIGH)] * 5
        assert _score(findings=mixed) == 70

    def test_comment_ratio(self):
        assert _score(stats=_stats(code=100, comments=4)) == 95
        assert _score(stats=_stats(code=100, comments=5)) == 100

    def test_no_code_lines_skips_comment_check(self):
        assert _score(stats=_stats(code=0, comments=0)) == 100

    def test_clamped_at_zero(self):
        weights = ScoreWeights(security_penalty_cap=500, critical_weight=100)
        assert _score(findings=[_finding(Severity.CRITICAL)] * 5, weights=weights) == 0

    def test_fractional_weights_are_floored(self):
        weights = ScoreWeights(medium_weight=0.5)
        assert _score(findings=[_finding(Severity.MEDIUM)], weights=weights) == 99

    @pytest.mark.parametrize("extra", [_finding(Severity.CRITICAL), _finding(Severity.MEDIUM)])
    def test_adding_findings_never_raises_score(self, extra):
        base = [_finding(Severity.HIGH)]
        assert _score(findings=base + [extra]) <= _score(findings=base)


class TestScoreBreakdown:
    def test_every_deduction_reported(self):
        breakdown = score_breakdown(
            _stats(files=300, loc=20_000, code=1000, comments=0),
            [Hotspot("a.ts", 20)],
            _graph(2, 7),
            1,
            [_finding(Severity.HIGH)],
        )
        assert breakdown.size == 10
        assert breakdown.lines == 10
        assert breakdown.hotspots == 3
        assert breakdown.coupling == 15
        assert breakdown.unused_dependencies == 2
        assert breakdown.security == 5
        assert breakdown.comments == 5
        assert breakdown.score == 50
