"""Reporting ports - Abstractions for per-trial output.

Each trial produces three reports: the shortest paths to every node,
one row of performance counters, and the per-hop distance and parent
chains. Trial 1 starts a fresh performance/detail report; later trials
append to it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import TrialResult


class ReportWriterPort(Protocol):
    """Port for writing trial reports.

    Implementation: adapters/reporting/csv_report_writer.py

    All methods raise ReportWriteError when the output cannot be written.
    """

    def write_paths(self, result: TrialResult, nodes: Sequence[int]) -> Path:
        """Write the path, distance and time to each node for one trial."""
        ...

    def write_performance(self, result: TrialResult) -> Path:
        """Write the performance counters of one trial."""
        ...

    def write_details(self, result: TrialResult, nodes: Sequence[int]) -> Path:
        """Write cumulative distances and predecessors along each path."""
        ...
