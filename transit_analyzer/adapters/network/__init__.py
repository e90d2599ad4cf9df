"""Network adapters - Implementations of the network ports.

Available implementations:
- CSVEdgeSource: Reads raw edge records from the network export
- CSVAdjacencyRepository: Reads and writes the adjacency list file
"""

from .csv_adjacency import CSVAdjacencyRepository
from .csv_edge_source import CSVEdgeSource

__all__ = ["CSVEdgeSource", "CSVAdjacencyRepository"]
