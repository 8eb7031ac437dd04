"""Relative import resolution against the project's file set."""

from __future__ import annotations

import posixpath
from collections.abc import Collection
from typing import Optional

# Probe order matters: the first candidate present in the file set wins.
RESOLUTION_SUFFIXES = (
    "",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    "/index.ts",
    "/index.tsx",
    "/index.js",
    "/index.jsx",
)


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


def candidate_paths(specifier: str, importer_dir: str) -> list[str]:
    """All probe paths for a relative specifier, in priority order.

    Each suffix contributes the joined path itself followed by a variant
    with a trailing ``.js`` rewritten to ``.ts``, which catches TypeScript
    sources imported through their compiled names.
    """
    specifier = specifier.replace("\\", "/")
    if specifier.startswith("/"):
        # Rooted at the project, not the filesystem
        joined = _normalize(specifier.lstrip("/") or ".")
    else:
        joined = _normalize(posixpath.join(importer_dir or ".", specifier))

    candidates: list[str] = []
    for suffix in RESOLUTION_SUFFIXES:
        candidate = _normalize(joined + suffix)
        candidates.append(candidate)
        if candidate.endswith(".js"):
            candidates.append(candidate[: -len(".js")] + ".ts")
    return candidates


def resolve_specifier(
    specifier: str, importer_path: str, project_files: Collection[str]
) -> Optional[str]:
    """Resolve a relative specifier to a project file path.

    Args:
        specifier: Raw relative specifier ("./util", "../lib/index.js", "/src/a")
        importer_path: Relative POSIX path of the importing file
        project_files: Normalized relative paths of every project file
            (a set gives O(1) probes)

    Returns:
        The first matching project path, or None when nothing matches
    """
    importer_dir = posixpath.dirname(importer_path.replace("\\", "/"))
    for candidate in candidate_paths(specifier, importer_dir):
        if candidate in project_files:
            return candidate
    return None
