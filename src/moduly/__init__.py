"""
Moduly - JavaScript/TypeScript project health analyzer.

Builds a module dependency graph, classifies package usage, scans for
insecure code patterns and leaked secrets, mines git hotspots and folds
everything into a single 0-100 health score.
"""

__version__ = "0.1.0"

from .api import analyze, write_report
from .models import ProjectReport

__all__ = [
    "analyze",
    "write_report",
    "ProjectReport",
]
