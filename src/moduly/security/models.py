"""Security finding model and ordering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank: critical first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class FindingSource(str, Enum):
    DEPENDENCY_AUDIT = "dependency-audit"
    CODE_SCAN = "code-scan"


@dataclass
class SecurityFinding:
    """A single security observation.

    Findings are never deduplicated; ``file``/``line`` are only set for
    code-scan findings.
    """

    name: str
    severity: Severity
    description: str
    source: FindingSource
    category: str
    file: Optional[str] = None
    line: Optional[int] = None


def sort_findings(findings: Iterable[SecurityFinding]) -> list[SecurityFinding]:
    """Order by severity, critical first; ties keep their input order."""
    return sorted(findings, key=lambda f: f.severity.rank)


def severity_counts(findings: Iterable[SecurityFinding]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for finding in findings:
        counts[finding.severity] += 1
    return counts
