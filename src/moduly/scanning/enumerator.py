"""Project file enumeration.

Walks the project root with sorted directory entries so that the file
order, and everything derived from it (graph truncation, finding order),
is reproducible across runs and platforms.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)


def enumerate_files(
    root: Path,
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
    exclude_files: Iterable[str] = (),
) -> list[str]:
    """List project files as relative POSIX paths.

    Args:
        root: Project root directory
        extensions: Suffixes to keep (e.g. ".ts")
        exclude_dirs: Directory names that are never descended into
        exclude_files: File names that are always skipped

    Hidden directories and dot-prefixed file names are always skipped.

    Returns:
        Relative paths in deterministic walk order

    Raises:
        InvalidPathError: If root does not exist or is not a directory
        FileAccessError: If root itself cannot be listed
    """
    if not root.exists():
        raise InvalidPathError(root, "Path does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "Path is not a directory")

    try:
        os.listdir(root)
    except OSError as e:
        raise FileAccessError(root, f"Cannot list project root: {e}")

    wanted = frozenset(extensions)
    skip_dirs = frozenset(exclude_dirs)
    skip_files = frozenset(exclude_files)
    result: list[str] = []

    def _on_error(err: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        # Hidden entries (.github, .eslintrc.js, ...) are not project sources
        dirnames[:] = sorted(
            d for d in dirnames if d not in skip_dirs and not d.startswith(".")
        )
        rel_dir = Path(dirpath).relative_to(root)
        for name in sorted(filenames):
            if name in skip_files or name.startswith("."):
                continue
            if os.path.splitext(name)[1] not in wanted:
                continue
            result.append((rel_dir / name).as_posix())

    logger.debug("Enumerated %d files under %s", len(result), root)
    return result
