"""Code scanning: structural patterns over syntax trees, secrets over text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..scanning.treesitter_parser import node_line, walk
from .models import FindingSource, SecurityFinding
from .patterns import (
    SECRET_PATTERNS,
    STRUCTURAL_NODE_TYPES,
    STRUCTURAL_PATTERNS,
    is_comment_line,
)

if TYPE_CHECKING:
    from tree_sitter import Tree

SECRET_CATEGORY = "Sensitive Data Exposure"


def scan_tree(tree: Tree, path: str) -> list[SecurityFinding]:
    """Match every node against the structural catalog.

    A node may match more than one pattern; each match is its own finding.
    """
    findings: list[SecurityFinding] = []
    for node in walk(tree, STRUCTURAL_NODE_TYPES):
        for pattern in STRUCTURAL_PATTERNS:
            if node.type in pattern.node_types and pattern.check(node):
                findings.append(
                    SecurityFinding(
                        name=pattern.name,
                        severity=pattern.severity,
                        description=pattern.description,
                        source=FindingSource.CODE_SCAN,
                        category=pattern.category,
                        file=path,
                        line=node_line(node),
                    )
                )
    return findings


def scan_secrets(text: str, path: str) -> list[SecurityFinding]:
    """Scan non-comment lines for secret-like assignments.

    At most one finding per line: the first matching pattern wins. Only
    lines that themselves look like comments are skipped; the interior of
    a block comment is not tracked.
    """
    findings: list[SecurityFinding] = []
    for index, line in enumerate(text.split("\n")):
        if is_comment_line(line):
            continue
        for secret in SECRET_PATTERNS:
            if secret.pattern.search(line):
                findings.append(
                    SecurityFinding(
                        name=secret.name,
                        severity=secret.severity,
                        description=secret.description,
                        source=FindingSource.CODE_SCAN,
                        category=SECRET_CATEGORY,
                        file=path,
                        line=index + 1,
                    )
                )
                break
    return findings
