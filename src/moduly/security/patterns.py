"""Fixed catalogs of dangerous code shapes and secret-like text."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..scanning.treesitter_parser import node_text
from .models import Severity

if TYPE_CHECKING:
    from tree_sitter import Node

_EXEC_NAMES = frozenset({"exec", "execSync"})


def _callee(node: Node) -> Optional[Node]:
    if node.type != "call_expression":
        return None
    return node.child_by_field_name("function")


def _is_identifier(node: Optional[Node], names: frozenset[str]) -> bool:
    return node is not None and node.type == "identifier" and node_text(node) in names


def _member_property(node: Optional[Node]) -> str:
    if node is None or node.type != "member_expression":
        return ""
    prop = node.child_by_field_name("property")
    if prop is None or prop.type != "property_identifier":
        return ""
    return node_text(prop)


def _is_eval_call(node: Node) -> bool:
    return _is_identifier(_callee(node), frozenset({"eval"}))


def _is_function_constructor(node: Node) -> bool:
    if node.type == "new_expression":
        return _is_identifier(node.child_by_field_name("constructor"), frozenset({"Function"}))
    return _is_identifier(_callee(node), frozenset({"Function"}))


def _is_exec_call(node: Node) -> bool:
    callee = _callee(node)
    return _is_identifier(callee, _EXEC_NAMES) or _member_property(callee) in _EXEC_NAMES


def _is_inner_html_assignment(node: Node) -> bool:
    if node.type not in ("assignment_expression", "augmented_assignment_expression"):
        return False
    return _member_property(node.child_by_field_name("left")) == "innerHTML"


def _is_dangerously_set_inner_html(node: Node) -> bool:
    if node.type != "jsx_attribute":
        return False
    named = node.named_children
    return bool(named) and node_text(named[0]) == "dangerouslySetInnerHTML"


def _is_document_write(node: Node) -> bool:
    callee = _callee(node)
    if _member_property(callee) != "write":
        return False
    return _is_identifier(callee.child_by_field_name("object"), frozenset({"document"}))  # type: ignore[union-attr]


@dataclass(frozen=True)
class StructuralPattern:
    """A dangerous syntax shape matched against individual tree nodes."""

    name: str
    category: str
    severity: Severity
    description: str
    node_types: frozenset[str]
    check: Callable[[Node], bool]


@dataclass(frozen=True)
class SecretPattern:
    """A regular expression for secret-like text on a single line."""

    name: str
    severity: Severity
    pattern: re.Pattern[str]

    @property
    def description(self) -> str:
        return (
            f"Potential {self.name.lower()} detected. Never commit secrets to source code. "
            "Use environment variables instead."
        )


_CALLS = frozenset({"call_expression"})

STRUCTURAL_PATTERNS: tuple[StructuralPattern, ...] = (
    StructuralPattern(
        name="eval() Usage",
        category="Code Injection",
        severity=Severity.CRITICAL,
        description=(
            "eval() executes arbitrary code and is a major injection risk. "
            "Use safer alternatives like JSON.parse()."
        ),
        node_types=_CALLS,
        check=_is_eval_call,
    ),
    StructuralPattern(
        name="Function() Constructor",
        category="Code Injection",
        severity=Severity.HIGH,
        description=(
            "Function() dynamically creates functions from strings, similar to eval(). "
            "Avoid passing user input."
        ),
        node_types=frozenset({"call_expression", "new_expression"}),
        check=_is_function_constructor,
    ),
    StructuralPattern(
        name="child_process exec()",
        category="Command Injection",
        severity=Severity.HIGH,
        description=(
            "exec() runs shell commands and is vulnerable to command injection. "
            "Prefer execFile() with explicit arguments."
        ),
        node_types=_CALLS,
        check=_is_exec_call,
    ),
    StructuralPattern(
        name="innerHTML Assignment",
        category="Cross-Site Scripting (XSS)",
        severity=Severity.MEDIUM,
        description=(
            "innerHTML injects raw HTML and can lead to XSS. "
            "Use textContent or a sanitization library instead."
        ),
        node_types=frozenset({"assignment_expression", "augmented_assignment_expression"}),
        check=_is_inner_html_assignment,
    ),
    StructuralPattern(
        name="dangerouslySetInnerHTML",
        category="Cross-Site Scripting (XSS)",
        severity=Severity.MEDIUM,
        description=(
            "dangerouslySetInnerHTML renders raw HTML in React components. "
            "Ensure content is properly sanitized."
        ),
        node_types=frozenset({"jsx_attribute"}),
        check=_is_dangerously_set_inner_html,
    ),
    StructuralPattern(
        name="document.write()",
        category="Cross-Site Scripting (XSS)",
        severity=Severity.MEDIUM,
        description=(
            "document.write() is a legacy DOM method that can overwrite the entire page "
            "and is XSS-prone."
        ),
        node_types=_CALLS,
        check=_is_document_write,
    ),
)

STRUCTURAL_NODE_TYPES = frozenset().union(*(p.node_types for p in STRUCTURAL_PATTERNS))

# Order matters: the first pattern matching a line wins.
SECRET_PATTERNS: tuple[SecretPattern, ...] = (
    SecretPattern(
        name="Hardcoded API Key",
        severity=Severity.HIGH,
        pattern=re.compile(r"""(?:api[_-]?key|apikey)\s*[:=]\s*['"][A-Za-z0-9_\-]{16,}['"]""", re.I),
    ),
    SecretPattern(
        name="Hardcoded Secret/Password",
        severity=Severity.CRITICAL,
        pattern=re.compile(r"""(?:secret|password|passwd|pwd)\s*[:=]\s*['"][^'"]{8,}['"]""", re.I),
    ),
    SecretPattern(
        name="AWS Credentials",
        severity=Severity.CRITICAL,
        pattern=re.compile(
            r"""(?:aws_access_key_id|aws_secret_access_key)\s*[:=]\s*['"][A-Za-z0-9/+=]{16,}['"]""",
            re.I,
        ),
    ),
    SecretPattern(
        name="Private Key Exposure",
        severity=Severity.CRITICAL,
        pattern=re.compile(r"""(?:private[_-]?key)\s*[:=]\s*['"][^'"]{20,}['"]""", re.I),
    ),
    SecretPattern(
        name="Hardcoded Token",
        severity=Severity.HIGH,
        pattern=re.compile(r"""(?:token)\s*[:=]\s*['"][A-Za-z0-9_\-.]{20,}['"]""", re.I),
    ),
)

COMMENT_PREFIXES = ("//", "*", "/*")


def is_comment_line(line: str) -> bool:
    return line.strip().startswith(COMMENT_PREFIXES)
