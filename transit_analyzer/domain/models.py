"""Immutable domain models for the Transit Path Analyzer.

All models are frozen dataclasses with slots. They carry the data that
flows between the graph core, the service layer and the report writers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

# Sentinel for both distance and time of a node not reached from the start.
UNREACHABLE = math.inf


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge, owned by its source node.

    Attributes:
        target: Id of the node the edge points to
        distance: Integer distance weight (>= 0)
        time: Travel time weight (>= 0)
    """

    target: int
    distance: int
    time: float

    @property
    def weight(self) -> tuple[int, float]:
        """The (distance, time) pair compared lexicographically."""
        return (self.distance, self.time)


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """One raw (source, target, distance, time) record from the network file."""

    source: int
    target: int
    distance: int
    time: float


@dataclass(frozen=True, slots=True)
class PerformanceCounters:
    """Instrumentation collected during one Dijkstra run.

    Attributes:
        comparisons: Nodes scanned during selection plus edge tests
        relaxations: Number of successful relaxations
        parent_changes: Relaxations that changed a node's predecessor
        auxiliary_size: Size of the node scan set
        elapsed_ms: CPU time spent in the main loop
        wall_ms: Wall-clock time spent in the main loop
    """

    comparisons: int = 0
    relaxations: int = 0
    parent_changes: int = 0
    auxiliary_size: int = 0
    elapsed_ms: float = 0.0
    wall_ms: float = 0.0

    @property
    def avg_parent_changes(self) -> float:
        """Parent changes per relaxation, 0 when nothing was relaxed."""
        if self.relaxations == 0:
            return 0.0
        return self.parent_changes / self.relaxations


@dataclass(frozen=True, slots=True)
class TrialResult:
    """Outcome of one shortest-path trial from a fixed start node.

    Attributes:
        start: The start node
        trial: 1-based trial number
        distances: Node -> cumulative distance, or UNREACHABLE
        times: Node -> cumulative time, or UNREACHABLE
        parents: Node -> predecessor on the shortest path, or None
        settled: Nodes in the order they were marked visited
        counters: Performance counters for this run
    """

    start: int
    trial: int
    distances: Mapping[int, float]
    times: Mapping[int, float]
    parents: Mapping[int, Optional[int]]
    settled: tuple[int, ...] = field(default_factory=tuple)
    counters: PerformanceCounters = field(default_factory=PerformanceCounters)

    def is_reachable(self, node: int) -> bool:
        """Check if node has a finite distance from the start."""
        return self.distances.get(node, UNREACHABLE) != UNREACHABLE

    @property
    def nodes(self) -> tuple[int, ...]:
        """All nodes covered by this trial, in scan order."""
        return tuple(self.distances)


@dataclass(frozen=True, slots=True)
class PathTrace:
    """A reconstructed path with the running metrics at each hop.

    Attributes:
        nodes: Nodes from the start to the destination
        distances: Cumulative distance at each node (starts at 0)
        times: Cumulative time at each node (starts at 0.0)
        predecessors: Predecessor of each node after the start, one per hop
    """

    nodes: tuple[int, ...]
    distances: tuple[float, ...]
    times: tuple[float, ...]
    predecessors: tuple[int, ...]

    @property
    def total_distance(self) -> float:
        return self.distances[-1]

    @property
    def total_time(self) -> float:
        return self.times[-1]

    @property
    def hop_distances(self) -> tuple[float, ...]:
        """Distance covered by each hop along the path."""
        return tuple(b - a for a, b in zip(self.distances, self.distances[1:]))

    @property
    def num_hops(self) -> int:
        return len(self.nodes) - 1


@dataclass(frozen=True, slots=True)
class BuildSummary:
    """Result of turning the raw network file into an adjacency dump."""

    records_read: int
    records_skipped: int
    nodes: int
    edges: int
    output_path: Path


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Result of running N trials from one start node.

    Attributes:
        start: The start node
        trials: Trial results in execution order
        node_count: Number of nodes in the analysed network
        report_paths: Report files written during the analysis
    """

    start: int
    trials: tuple[TrialResult, ...]
    node_count: int
    report_paths: tuple[Path, ...] = field(default_factory=tuple)

    def trial(self, number: int) -> TrialResult:
        """Return the result of trial ``number`` (1-based)."""
        if not 1 <= number <= len(self.trials):
            raise IndexError(f"No trial {number}, ran {len(self.trials)}")
        return self.trials[number - 1]

    @property
    def counters_consistent(self) -> bool:
        """Check if every trial produced the same comparison/relaxation counts."""
        if not self.trials:
            return True
        first = self.trials[0].counters
        return all(
            t.counters.comparisons == first.comparisons
            and t.counters.relaxations == first.relaxations
            for t in self.trials
        )
