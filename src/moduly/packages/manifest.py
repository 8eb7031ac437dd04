"""package.json loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ..logging_config import get_logger
from .models import PackageManifest

logger = get_logger(__name__)

MANIFEST_FILENAME = "package.json"
LOCKFILE_FILENAME = "package-lock.json"


def _string_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v if isinstance(v, str) else str(v) for k, v in value.items()}


def parse_manifest(data: Any) -> PackageManifest:
    """Build a PackageManifest from decoded package.json content."""
    if not isinstance(data, dict):
        return PackageManifest()
    name = data.get("name")
    return PackageManifest(
        name=name if isinstance(name, str) else "",
        dependencies=_string_map(data.get("dependencies")),
        dev_dependencies=_string_map(data.get("devDependencies")),
    )


def load_manifest(root: Path) -> Optional[PackageManifest]:
    """Load ``<root>/package.json``.

    Returns None when the project has no manifest or it can't be decoded;
    package classification then falls back to its empty result.
    """
    path = root / MANIFEST_FILENAME
    if not path.is_file():
        logger.info("No %s found; skipping package classification", MANIFEST_FILENAME)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None

    return parse_manifest(data)
