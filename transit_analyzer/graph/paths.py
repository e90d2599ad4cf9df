"""Path reconstruction from a Dijkstra parent table.

Paths are rebuilt with an explicit backward walk over the parent links,
so long paths never hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple

from ..domain.models import PathTrace, TrialResult

logger = logging.getLogger(__name__)


def reconstruct_path(
    parents: Mapping[int, Optional[int]], start: int, target: int
) -> Optional[Tuple[int, ...]]:
    """Return the nodes from ``start`` to ``target``, or None if unreachable.

    The walk stops on a ``None`` parent reached before ``start``, on a
    target missing from the table, and on a cycle in the parent links;
    all three are reported as unreachable.
    """
    if target == start:
        return (start,)
    if target not in parents:
        return None

    walked: List[int] = [target]
    current = target
    # A valid chain visits each node at most once.
    for _ in range(len(parents)):
        parent = parents.get(current)
        if parent is None:
            return None
        walked.append(parent)
        if parent == start:
            walked.reverse()
            return tuple(walked)
        current = parent

    logger.warning(
        "Parent chain does not reach start",
        extra={"start": start, "target": target},
    )
    return None


def trace_path(result: TrialResult, target: int) -> Optional[PathTrace]:
    """Rebuild the path to ``target`` with running distance, time and parent.

    Args:
        result: A finished trial.
        target: Destination node.

    Returns:
        The PathTrace, or None when ``target`` is unreachable.
    """
    nodes = reconstruct_path(result.parents, result.start, target)
    if nodes is None:
        return None

    return PathTrace(
        nodes=nodes,
        distances=tuple(result.distances[node] for node in nodes),
        times=tuple(result.times[node] for node in nodes),
        predecessors=tuple(result.parents[node] for node in nodes[1:]),
    )
