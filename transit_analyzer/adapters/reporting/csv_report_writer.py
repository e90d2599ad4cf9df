"""CSV report writer adapter.

Writes the three per-trial reports:
- the path report (``;``-separated), rewritten on every trial
- the performance report, started fresh on trial 1 and appended after
- the per-hop detail report, started fresh on trial 1 and appended after
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ...config import ReportConfig, get_config
from ...domain.models import PathTrace, TrialResult
from ...graph.paths import trace_path
from ..files import atomic_writer

PATHS_HEADER = ["Start Node", "End Node", "Path", "Distance", "Time"]
PERFORMANCE_HEADER = [
    "Start Node",
    "Trial",
    "Execution Time (ms)",
    "Comparisons",
    "Relaxations",
    "Auxiliary Size",
    "Avg Parent Changes",
]
DETAILS_HEADER = ["start node", "trial", "distance", "parent"]

NO_PATH = "No path"


def format_distance_chain(trace: Optional[PathTrace]) -> str:
    """Render cumulative distances as ``{0, 5, 10}``."""
    if trace is None:
        return "{}"
    return "{" + ", ".join(str(int(d)) for d in trace.distances) + "}"


def format_parent_chain(trace: Optional[PathTrace]) -> str:
    """Render the predecessor at each hop as ``{[], [1], [2]}``."""
    if trace is None:
        return "{}"
    parts = ["[]"] + [f"[{p}]" for p in trace.predecessors]
    return "{" + ", ".join(parts) + "}"


@dataclass
class CSVReportWriter:
    """Report writer producing the CSV reports.

    This adapter implements ReportWriterPort. Every file is replaced
    atomically, so an aborted write never leaves a truncated report.

    Attributes:
        config: Report configuration (output directory, file names)
    """

    config: ReportConfig = field(default_factory=lambda: get_config().report)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def write_paths(self, result: TrialResult, nodes: Sequence[int]) -> Path:
        path = self.config.paths_path
        with atomic_writer(path) as f:
            writer = csv.writer(f, delimiter=";", lineterminator="\n")
            writer.writerow(PATHS_HEADER)
            for node in nodes:
                if node == result.start:
                    continue
                trace = trace_path(result, node)
                if trace is None:
                    writer.writerow([result.start, node, NO_PATH, "", ""])
                else:
                    writer.writerow(
                        [
                            result.start,
                            node,
                            "->".join(str(n) for n in trace.nodes),
                            int(trace.total_distance),
                            f"{trace.total_time:.2f}",
                        ]
                    )

        self._logger.debug(
            "Path report written", extra={"path": str(path), "trial": result.trial}
        )
        return path

    def write_performance(self, result: TrialResult) -> Path:
        path = self.config.performance_path
        counters = result.counters
        fresh = result.trial == 1

        with atomic_writer(path, append=not fresh) as f:
            writer = csv.writer(f, lineterminator="\n")
            if fresh:
                writer.writerow(PERFORMANCE_HEADER)
            writer.writerow(
                [
                    result.start,
                    result.trial,
                    f"{counters.elapsed_ms:.2f}",
                    counters.comparisons,
                    counters.relaxations,
                    counters.auxiliary_size,
                    f"{counters.avg_parent_changes:.2f}",
                ]
            )

        self._logger.debug(
            "Performance row written",
            extra={"path": str(path), "trial": result.trial},
        )
        return path

    def write_details(self, result: TrialResult, nodes: Sequence[int]) -> Path:
        path = self.config.details_path
        fresh = result.trial == 1

        with atomic_writer(path, append=not fresh) as f:
            writer = csv.writer(f, lineterminator="\n")
            if fresh:
                writer.writerow(DETAILS_HEADER)
            for node in nodes:
                if node == result.start:
                    continue
                trace = trace_path(result, node)
                writer.writerow(
                    [
                        result.start,
                        result.trial,
                        format_distance_chain(trace),
                        format_parent_chain(trace),
                    ]
                )

        self._logger.debug(
            "Detail report written", extra={"path": str(path), "trial": result.trial}
        )
        return path
