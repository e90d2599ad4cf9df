"""Network ports - Abstractions for reading and writing the transit network.

These protocols define the contracts between the analysis service and
the storage adapters: where raw edge records come from, and how the
adjacency representation is persisted and read back.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Protocol

if TYPE_CHECKING:
    from ..domain.models import EdgeRecord
    from ..graph.store import GraphStore


class EdgeSourcePort(Protocol):
    """Port for raw (source, target, distance, time) records.

    Implementation: adapters/network/csv_edge_source.py

    Malformed records must be skipped by the implementation, never
    raised, so a single bad line cannot abort a load.
    """

    @property
    def skipped(self) -> int:
        """Number of records skipped during the last iteration."""
        ...

    def iter_edges(self) -> Iterator[EdgeRecord]:
        """Yield every well-formed edge record.

        Raises:
            NetworkFileError: If the source cannot be opened.
        """
        ...


class AdjacencySourcePort(Protocol):
    """Port for loading the per-node neighbor lists into a store.

    Implementation: adapters/network/csv_adjacency.py
    """

    def exists(self) -> bool:
        """Check if an adjacency representation is available."""
        ...

    def load_into(self, store: GraphStore) -> int:
        """Populate store from the adjacency representation.

        Returns:
            Number of node lines loaded.

        Raises:
            AdjacencyFileMissingError: If there is nothing to load.
        """
        ...


class AdjacencySinkPort(Protocol):
    """Port for persisting a store as per-node neighbor lists."""

    def write(self, store: GraphStore) -> Path:
        """Dump every node with outgoing edges.

        Returns:
            Location the adjacency list was written to.

        Raises:
            ReportWriteError: If the output cannot be written.
        """
        ...
