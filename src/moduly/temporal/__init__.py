"""Temporal analysis: hotspots mined from git history."""

from .git_extractor import GitExtractor
from .models import Hotspot

__all__ = ["GitExtractor", "Hotspot"]
