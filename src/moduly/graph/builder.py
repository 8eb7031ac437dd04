"""Dependency graph construction from per-file resolution results."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..logging_config import get_logger
from .models import DependencyGraph, Edge

logger = get_logger(__name__)

DEFAULT_MAX_NODES = 1000
DEFAULT_MAX_EDGES = 2000


def build_dependency_graph(
    file_paths: Sequence[str],
    resolved_imports: Iterable[tuple[str, Sequence[str]]],
    max_nodes: int = DEFAULT_MAX_NODES,
    max_edges: int = DEFAULT_MAX_EDGES,
) -> DependencyGraph:
    """Aggregate resolved imports into a capped graph.

    Args:
        file_paths: Every project file, in enumeration order
        resolved_imports: ``(importer, [targets...])`` pairs in enumeration
            order; targets are already-resolved project paths in import order
        max_nodes: Nodes kept, first N in enumeration order
        max_edges: Edges kept, first N in discovery order

    Edges whose endpoints fall outside the kept node set are dropped before
    the edge cap is applied, so every kept edge connects two kept nodes.
    """
    nodes = [p.replace("\\", "/") for p in file_paths]
    all_edges = [
        Edge(source=source.replace("\\", "/"), target=target)
        for source, targets in resolved_imports
        for target in targets
    ]

    kept_nodes = nodes[:max_nodes]
    if len(nodes) > max_nodes:
        logger.info("Dependency graph truncated to %d of %d nodes", max_nodes, len(nodes))
        node_set = set(kept_nodes)
        all_edges = [e for e in all_edges if e.source in node_set and e.target in node_set]

    if len(all_edges) > max_edges:
        logger.info("Dependency graph truncated to %d of %d edges", max_edges, len(all_edges))

    return DependencyGraph(nodes=kept_nodes, edges=all_edges[:max_edges])
