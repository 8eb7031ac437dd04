"""Dependency graph data model.

The graph is a lossy projection: ``nodes`` and ``edges`` are each truncated
to a configured cap in discovery order. Consumers must not assume every
project file or import is represented once a cap has been hit.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edge:
    """A resolved local import: ``source`` imports ``target``."""

    source: str
    target: str


@dataclass
class DependencyGraph:
    """File-level import graph.

    Multi-edges (the same import written twice) and self-edges are kept.
    """

    nodes: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    @property
    def coupling_ratio(self) -> float:
        """Edges per node; proxy for architectural entanglement."""
        return len(self.edges) / max(len(self.nodes), 1)
