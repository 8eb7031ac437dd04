"""Source file loading."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .languages import extension_of

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """One enumerated file and its text.

    ``text`` is None when the file could not be read; such files still
    count towards project totals and graph nodes but are skipped by every
    content-based analysis.
    """

    path: str
    size: int = 0
    text: Optional[str] = None

    @property
    def extension(self) -> str:
        return extension_of(self.path)

    @property
    def readable(self) -> bool:
        return self.text is not None


def read_source(root: Path, rel_path: str) -> str:
    """Read a project file as UTF-8, replacing undecodable bytes.

    Raises:
        FileAccessError: If the file can't be read
    """
    try:
        return (root / rel_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(root / rel_path, f"OS error: {e}")


def load_source(root: Path, rel_path: str) -> SourceFile:
    """Load a single file; unreadable files come back with ``text=None``."""
    normalized = rel_path.replace("\\", "/")
    try:
        size = (root / rel_path).stat().st_size
        text = read_source(root, rel_path)
    except (OSError, FileAccessError) as e:
        logger.debug("Skipping unreadable file %s: %s", normalized, e)
        return SourceFile(path=normalized)
    return SourceFile(path=normalized, size=size, text=text)


def load_sources(root: Path, rel_paths: list[str], workers: Optional[int] = None) -> list[SourceFile]:
    """Load all files in parallel, preserving the input order."""
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda p: load_source(root, p), rel_paths))
