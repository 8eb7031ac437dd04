"""Dependency audit adapter around `npm audit --json`.

npm exits non-zero whenever vulnerabilities are found, so the exit code
is ignored and stdout is parsed directly. Any failure degrades to an
empty finding list.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

from ..logging_config import get_logger
from ..packages.manifest import LOCKFILE_FILENAME, MANIFEST_FILENAME
from .models import FindingSource, SecurityFinding, Severity

logger = get_logger(__name__)

AUDIT_CATEGORY = "Dependency Vulnerability"
DEFAULT_AUDIT_TIMEOUT = 30

_SEVERITY_ALIASES = {
    "critical": Severity.CRITICAL,
    "high": Severity.HIGH,
    "medium": Severity.MEDIUM,
    "low": Severity.LOW,
}


def normalize_severity(value: Any) -> Severity:
    """Map npm severities onto the four-level scale.

    Only the four level names are kept; anything else, including npm's
    ``moderate`` and ``info``, becomes low.
    """
    return _SEVERITY_ALIASES.get(str(value).lower(), Severity.LOW)


def _describe_via(via: Any) -> str:
    if isinstance(via, list):
        return ", ".join(
            str(v.get("title") or v.get("name") or "") for v in via if isinstance(v, dict)
        )
    return "" if via is None else str(via)


def parse_audit_output(payload: Any) -> list[SecurityFinding]:
    """Normalize decoded `npm audit --json` output into findings.

    Handles the npm 7+ ``vulnerabilities`` map and the npm 6
    ``advisories`` collection (keyed by id, or a plain list); anything
    else yields no findings.
    """
    findings: list[SecurityFinding] = []
    if not isinstance(payload, dict):
        return findings

    vulnerabilities = payload.get("vulnerabilities")
    advisories = payload.get("advisories")
    if isinstance(advisories, dict):
        advisories = list(advisories.values())

    if isinstance(vulnerabilities, dict):
        for name, vuln in vulnerabilities.items():
            if not isinstance(vuln, dict):
                continue
            version_range = vuln.get("range") or ""
            description = _describe_via(vuln.get("via"))
            findings.append(
                SecurityFinding(
                    name=f"{name} ({version_range})",
                    severity=normalize_severity(vuln.get("severity")),
                    description=description or f"Vulnerable version: {version_range}",
                    source=FindingSource.DEPENDENCY_AUDIT,
                    category=AUDIT_CATEGORY,
                )
            )
    elif isinstance(advisories, list):
        for advisory in advisories:
            if not isinstance(advisory, dict):
                continue
            title = advisory.get("title") or ""
            findings.append(
                SecurityFinding(
                    name=f"{advisory.get('module_name', '')} - {title}",
                    severity=normalize_severity(advisory.get("severity")),
                    description=advisory.get("overview") or title,
                    source=FindingSource.DEPENDENCY_AUDIT,
                    category=AUDIT_CATEGORY,
                )
            )

    return findings


class DependencyAuditor:
    """Runs the package ecosystem's vulnerability lookup once per project."""

    def __init__(self, timeout_seconds: int = DEFAULT_AUDIT_TIMEOUT, command: str = "npm"):
        self.timeout_seconds = timeout_seconds
        self.command = command

    def run(self, root: Path) -> list[SecurityFinding]:
        if not (root / MANIFEST_FILENAME).is_file() or not (root / LOCKFILE_FILENAME).is_file():
            logger.info("No lockfile found; skipping dependency audit")
            return []

        try:
            result = subprocess.run(
                [self.command, "audit", "--json"],
                cwd=str(root),
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError:
            logger.warning("%s not found; skipping dependency audit", self.command)
            return []
        except subprocess.TimeoutExpired:
            logger.warning("Dependency audit timed out after %ds", self.timeout_seconds)
            return []
        except OSError as e:
            logger.warning("Dependency audit failed: %s", e)
            return []

        if not result.stdout.strip():
            logger.warning("Dependency audit produced no output (exit %d)", result.returncode)
            return []

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            logger.warning("Cannot parse dependency audit output: %s", e)
            return []

        findings = parse_audit_output(payload)
        logger.debug("Dependency audit reported %d findings", len(findings))
        return findings
