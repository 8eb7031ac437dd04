"""Extract commit-touch counts from git history via subprocess."""

import subprocess
from collections import Counter
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from .models import Hotspot

logger = get_logger(__name__)

DEFAULT_HOTSPOT_LIMIT = 10


class GitExtractor:
    """Count how often each file appears in the git log."""

    def __init__(self, repo_path: str, timeout_seconds: int = 30):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout_seconds = timeout_seconds

    def hotspots(self, limit: int = DEFAULT_HOTSPOT_LIMIT) -> list[Hotspot]:
        """Most frequently committed files, most-touched first.

        Files with equal counts keep the order in which the log first
        mentions them (newest commits first). Returns an empty list when
        the path is not a git repository or git is unavailable.
        """
        if not self._is_git_repo():
            logger.info("Not a git repository; skipping hotspot analysis")
            return []

        raw = self._run_git_log()
        if raw is None:
            return []

        counts = self._count_files(raw)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [Hotspot(file=f, commits=n) for f, n in ranked[:limit]]

    def _is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (OSError, subprocess.TimeoutExpired):
            return False

    def _run_git_log(self) -> Optional[str]:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "log", "--pretty=format:", "--name-only"],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("git log error: %s", e)
            return None

        if result.returncode != 0:
            # Fresh repositories without commits land here too
            logger.info("git log failed: %s", result.stderr.strip())
            return None
        return result.stdout

    @staticmethod
    def _count_files(raw: str) -> Counter:
        counts: Counter = Counter()
        for line in raw.split("\n"):
            line = line.strip()
            if line:
                counts[line] += 1
        return counts
