"""In-memory store for the directed transit network.

The store maps each node id to its outgoing edges, keyed by target so a
duplicate (source, target) pair relaxes the existing edge instead of
creating a parallel one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from ..domain.models import Edge


@dataclass
class GraphStore:
    """Directed, weighted graph keyed by integer node ids.

    Node ids are arbitrary integers: there is no density assumption and
    no upper bound. Nodes are remembered in order of first appearance,
    either as a source or as a target.
    """

    _adjacency: Dict[int, Dict[int, Edge]] = field(default_factory=dict, repr=False)
    # dict used as an insertion-ordered set
    _nodes: Dict[int, None] = field(default_factory=dict, repr=False)

    def add_node(self, node: int) -> None:
        """Register a node, even if it has no edges."""
        self._nodes.setdefault(node, None)

    def insert_edge(self, source: int, target: int, distance: int, time: float) -> None:
        """Insert source -> target, keeping the smaller (distance, time) pair.

        If the edge already exists it is only replaced when the new pair is
        strictly smaller in lexicographic order. Weights are not validated.
        """
        self.add_node(source)
        self.add_node(target)

        edges = self._adjacency.setdefault(source, {})
        current = edges.get(target)
        if current is None or (distance, time) < current.weight:
            edges[target] = Edge(target=target, distance=distance, time=time)

    def neighbors(self, node: int) -> Sequence[Edge]:
        """Outgoing edges of node; empty when it has none."""
        edges = self._adjacency.get(node)
        if not edges:
            return ()
        return tuple(edges.values())

    def edge(self, source: int, target: int) -> Optional[Edge]:
        return self._adjacency.get(source, {}).get(target)

    def node_exists(self, node: int) -> bool:
        return node in self._nodes

    def nodes(self) -> List[int]:
        """All nodes in order of first appearance."""
        return list(self._nodes)

    def sources(self) -> List[int]:
        """Nodes with at least one outgoing edge, sorted by id."""
        return sorted(node for node, edges in self._adjacency.items() if edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def clear(self) -> None:
        """Release every edge and node record."""
        for edges in self._adjacency.values():
            edges.clear()
        self._adjacency.clear()
        self._nodes.clear()

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[int]:
        return iter(self._nodes)
