"""Security scanning: code patterns, secrets and dependency audit."""

from .audit import DependencyAuditor, parse_audit_output
from .code_scan import scan_secrets, scan_tree
from .models import FindingSource, SecurityFinding, Severity, severity_counts, sort_findings

__all__ = [
    "DependencyAuditor",
    "parse_audit_output",
    "scan_secrets",
    "scan_tree",
    "FindingSource",
    "SecurityFinding",
    "Severity",
    "severity_counts",
    "sort_findings",
]
