"""Single-source shortest paths using Dijkstra's algorithm.

The minimum is found with a linear scan over every node rather than a
heap, which keeps the instrumentation counters literal: each scan costs
one comparison per node in the graph, settled nodes included, and every
edge test costs two, whether or not it relaxes.

Nodes are ordered by (distance, time). Distances are integers and times
are floats; the two keys are compared lexicographically and never folded
into a single cost.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Set

from ..domain.models import UNREACHABLE, PerformanceCounters, TrialResult
from .store import GraphStore

logger = logging.getLogger(__name__)

# Comparisons charged for each edge examined during relaxation.
EDGE_TEST_COMPARISONS = 2


def run_dijkstra(graph: GraphStore, start: int, trial: int = 1) -> TrialResult:
    """Compute shortest distances from ``start`` to every node in ``graph``.

    Parameters
    ----------
    graph:
        The network. It is only read, never modified.
    start:
        Start node. Callers are expected to validate that it exists; if it
        does not, it is still seeded so the result reports it at distance 0.
    trial:
        1-based trial number recorded on the result.

    Returns
    -------
    TrialResult
        Distance, time and parent tables plus the performance counters.
        Unreachable nodes keep ``UNREACHABLE`` and a ``None`` parent.
    """
    order = graph.nodes()
    if start not in graph:
        order.insert(0, start)

    distances: Dict[int, float] = {node: UNREACHABLE for node in order}
    times: Dict[int, float] = {node: UNREACHABLE for node in order}
    parents: Dict[int, Optional[int]] = {node: None for node in order}
    visited: Set[int] = set()
    settled: List[int] = []

    comparisons = 0
    relaxations = 0
    parent_changes = 0

    cpu_start = time.process_time()
    wall_start = time.perf_counter()

    distances[start] = 0
    times[start] = 0.0

    while True:
        u: Optional[int] = None
        best_distance = UNREACHABLE
        best_time = UNREACHABLE

        for node in order:
            comparisons += 1
            if node in visited:
                continue
            d = distances[node]
            if d < best_distance or (d == best_distance and times[node] < best_time):
                u = node
                best_distance = d
                best_time = times[node]

        if u is None:
            break

        visited.add(u)
        settled.append(u)

        for edge in graph.neighbors(u):
            v = edge.target
            candidate = best_distance + edge.distance
            candidate_time = best_time + edge.time

            comparisons += EDGE_TEST_COMPARISONS
            if candidate < distances[v] or (
                candidate == distances[v] and candidate_time < times[v]
            ):
                relaxations += 1
                if parents[v] != u:
                    parent_changes += 1
                distances[v] = candidate
                times[v] = candidate_time
                parents[v] = u

    elapsed_ms = (time.process_time() - cpu_start) * 1000
    wall_ms = (time.perf_counter() - wall_start) * 1000

    counters = PerformanceCounters(
        comparisons=comparisons,
        relaxations=relaxations,
        parent_changes=parent_changes,
        auxiliary_size=len(order),
        elapsed_ms=elapsed_ms,
        wall_ms=wall_ms,
    )

    logger.debug(
        "Dijkstra trial finished",
        extra={
            "start": start,
            "trial": trial,
            "settled": len(settled),
            "comparisons": comparisons,
            "relaxations": relaxations,
        },
    )

    return TrialResult(
        start=start,
        trial=trial,
        distances=distances,
        times=times,
        parents=parents,
        settled=tuple(settled),
        counters=counters,
    )
