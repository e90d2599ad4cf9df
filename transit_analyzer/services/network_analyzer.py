"""Network analyzer service - Main orchestrator.

Two use cases:
1. Build: ingest raw edge records, relax duplicates and persist the
   adjacency list.
2. Analyze: reload the adjacency list, run N independent Dijkstra trials
   from one start node and write the reports after each trial.

The graph store lives only for the duration of one use case and is
released before control returns to the caller, whether the run succeeds
or fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.errors import (
    AdjacencyFileMissingError,
    InvalidTrialCountError,
    NetworkFileError,
    ReportWriteError,
    StartNodeNotFoundError,
    TransitAnalyzerError,
)
from ..domain.models import AnalysisResult, BuildSummary, TrialResult
from ..graph.dijkstra import run_dijkstra
from ..graph.store import GraphStore
from ..ports.network import AdjacencySinkPort, AdjacencySourcePort, EdgeSourcePort
from ..ports.reporting import ReportWriterPort


@dataclass
class NetworkAnalyzerService:
    """Main service for building and analysing the transit network.

    Attributes:
        edge_source: Supplies raw edge records
        adjacency_source: Loads the adjacency list into a store
        adjacency_sink: Persists a store as an adjacency list
        report_writer: Writes per-trial reports
        history: Analyses run during this session, oldest first
    """

    edge_source: EdgeSourcePort
    adjacency_source: AdjacencySourcePort
    adjacency_sink: AdjacencySinkPort
    report_writer: ReportWriterPort
    history: List[AnalysisResult] = field(default_factory=list)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build_adjacency(self) -> BuildSummary:
        """Turn the raw edge records into an adjacency list file.

        Returns:
            BuildSummary with record, node and edge counts.

        Raises:
            NetworkFileError: If the raw network file cannot be read.
            ReportWriteError: If the adjacency list cannot be written.
        """
        store = GraphStore()
        try:
            read = 0
            for record in self.edge_source.iter_edges():
                store.insert_edge(
                    record.source, record.target, record.distance, record.time
                )
                read += 1

            self._logger.info(
                "Network ingested",
                extra={
                    "records": read,
                    "skipped": self.edge_source.skipped,
                    "nodes": store.node_count,
                    "edges": store.edge_count,
                },
            )

            output = self.adjacency_sink.write(store)
            return BuildSummary(
                records_read=read,
                records_skipped=self.edge_source.skipped,
                nodes=store.node_count,
                edges=store.edge_count,
                output_path=output,
            )
        finally:
            store.clear()

    def _load_with_start(self, store: GraphStore, start: int) -> None:
        self.adjacency_source.load_into(store)

        if store.node_count == 0:
            raise AdjacencyFileMissingError(
                "No nodes found in the adjacency list, create it first"
            )
        if not store.node_exists(start):
            raise StartNodeNotFoundError(
                f"Start node {start} not found in the network", node=start
            )

    def check_start(self, start: int) -> Optional[str]:
        """Check that ``start`` is a node of the built network.

        Lets the menu reject an unknown start node before asking for
        the trial count. The graph is loaded and released again.

        Returns:
            None if the node exists, otherwise the error message.
        """
        store = GraphStore()
        try:
            self._load_with_start(store, start)
        except TransitAnalyzerError as e:
            return e.message
        finally:
            store.clear()
        return None

    def analyze(self, start: int, trials: int) -> AnalysisResult:
        """Run ``trials`` independent shortest-path trials from ``start``.

        Args:
            start: Start node id.
            trials: Number of trials, at least 1.

        Returns:
            AnalysisResult holding every trial, also appended to history.

        Raises:
            InvalidTrialCountError: If trials < 1.
            AdjacencyFileMissingError: If the adjacency list was never built.
            StartNodeNotFoundError: If start is not in the network.
            ReportWriteError: If a report cannot be written.
        """
        if trials < 1:
            raise InvalidTrialCountError(
                f"Number of trials must be at least 1, got {trials}",
                trials=trials,
            )

        store = GraphStore()
        try:
            self._load_with_start(store, start)

            nodes = store.nodes()
            results: List[TrialResult] = []
            reports: List[Path] = []

            for trial in range(1, trials + 1):
                result = run_dijkstra(store, start, trial)
                results.append(result)

                reports = [
                    self.report_writer.write_paths(result, nodes),
                    self.report_writer.write_performance(result),
                    self.report_writer.write_details(result, nodes),
                ]

                self._logger.info(
                    "Trial complete",
                    extra={
                        "start": start,
                        "trial": trial,
                        "comparisons": result.counters.comparisons,
                        "relaxations": result.counters.relaxations,
                        "wall_ms": round(result.counters.wall_ms, 3),
                    },
                )

            analysis = AnalysisResult(
                start=start,
                trials=tuple(results),
                node_count=len(nodes),
                report_paths=tuple(reports),
            )
            self.history.append(analysis)
            return analysis
        finally:
            store.clear()

    def build_adjacency_safe(self) -> Tuple[Optional[BuildSummary], Optional[str]]:
        """Build the adjacency list, returning an error message instead of raising.

        ReportWriteError is not recoverable and still propagates.
        """
        try:
            return self.build_adjacency(), None
        except NetworkFileError as e:
            return None, e.message

    def analyze_safe(
        self, start: int, trials: int
    ) -> Tuple[Optional[AnalysisResult], Optional[str]]:
        """Run an analysis, returning an error message instead of raising.

        ReportWriteError is not recoverable and still propagates.
        """
        try:
            return self.analyze(start, trials), None
        except ReportWriteError:
            raise
        except TransitAnalyzerError as e:
            self._logger.warning("Analysis rejected", extra={"reason": e.message})
            return None, e.message
