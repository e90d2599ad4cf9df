"""Graph core for the transit network.

This subpackage holds the in-memory network store, the instrumented
Dijkstra engine and the path reconstruction helpers built on its
parent tables.
"""

from .dijkstra import run_dijkstra
from .paths import reconstruct_path, trace_path
from .store import GraphStore

__all__ = ["GraphStore", "run_dijkstra", "reconstruct_path", "trace_path"]
