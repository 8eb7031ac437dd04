"""File-level dependency graph: resolution and construction."""

from .builder import build_dependency_graph
from .models import DependencyGraph, Edge
from .resolver import candidate_paths, resolve_specifier

__all__ = [
    "build_dependency_graph",
    "DependencyGraph",
    "Edge",
    "candidate_paths",
    "resolve_specifier",
]
