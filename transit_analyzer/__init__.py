"""Top-level package for the Transit Path Analyzer.

Loads a transit network from a CSV export, computes single-source
shortest paths with an instrumented Dijkstra, and writes path,
performance and per-hop detail reports for every trial.
"""

__version__ = "0.1.0"
