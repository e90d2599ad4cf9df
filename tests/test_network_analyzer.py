"""Tests for the network analyzer service."""

from pathlib import Path
from typing import List

import pytest

import transit_analyzer.services.network_analyzer as network_analyzer
from transit_analyzer.adapters.network import CSVAdjacencyRepository, CSVEdgeSource
from transit_analyzer.adapters.reporting import CSVReportWriter
from transit_analyzer.config import NetworkConfig, ReportConfig
from transit_analyzer.domain.errors import (
    AdjacencyFileMissingError,
    InvalidTrialCountError,
    NetworkFileError,
    ReportWriteError,
    StartNodeNotFoundError,
)
from transit_analyzer.graph.store import GraphStore
from transit_analyzer.services import NetworkAnalyzerService

NETWORK_CSV = """from_stop_I;to_stop_I;attributes
1;2;{'d': 10, 'duration_avg': 5.0, 'n_vehicles': 4}
1;2;{'d': 5, 'duration_avg': 1.0, 'n_vehicles': 4}
2;3;{'d': 5, 'duration_avg': 1.0, 'n_vehicles': 2}
1;3;{'d': 11, 'duration_avg': 0.5, 'n_vehicles': 1}
this line is broken
4;1;{'d': 3, 'duration_avg': 2.0, 'n_vehicles': 1}
"""


class FailingWriter:
    def write_paths(self, result, nodes):
        raise ReportWriteError("disk full", file_path="paths.csv")

    def write_performance(self, result):
        raise ReportWriteError("disk full", file_path="performance.csv")

    def write_details(self, result, nodes):
        raise ReportWriteError("disk full", file_path="output.csv")


@pytest.fixture
def network_config(tmp_path) -> NetworkConfig:
    return NetworkConfig(data_dir=tmp_path)


@pytest.fixture
def report_config(tmp_path) -> ReportConfig:
    return ReportConfig(output_dir=tmp_path / "reports")


@pytest.fixture
def service(network_config, report_config) -> NetworkAnalyzerService:
    adjacency = CSVAdjacencyRepository(network_config)
    return NetworkAnalyzerService(
        edge_source=CSVEdgeSource(network_config),
        adjacency_source=adjacency,
        adjacency_sink=adjacency,
        report_writer=CSVReportWriter(report_config),
    )


@pytest.fixture
def built_service(service, network_config) -> NetworkAnalyzerService:
    network_config.network_path.write_text(NETWORK_CSV)
    service.build_adjacency()
    return service


@pytest.fixture
def released(monkeypatch) -> List[int]:
    """Node counts of every store the service releases."""
    counts: List[int] = []

    class TrackingStore(GraphStore):
        def clear(self) -> None:
            counts.append(self.node_count)
            super().clear()

    monkeypatch.setattr(network_analyzer, "GraphStore", TrackingStore)
    return counts


class TestBuildAdjacency:
    def test_summary_and_dump(self, service, network_config):
        network_config.network_path.write_text(NETWORK_CSV)

        summary = service.build_adjacency()

        assert summary.records_read == 5
        assert summary.records_skipped == 1
        assert summary.nodes == 4
        assert summary.edges == 4
        assert summary.output_path == network_config.adjacency_path
        assert network_config.adjacency_path.read_text().splitlines() == [
            "1;[2,5,1.00];[3,11,0.50]",
            "2;[3,5,1.00]",
            "4;[1,3,2.00]",
        ]

    def test_store_is_released(self, service, network_config, released):
        network_config.network_path.write_text(NETWORK_CSV)

        service.build_adjacency()

        assert released == [4]

    def test_missing_network_file(self, service, network_config, released):
        with pytest.raises(NetworkFileError):
            service.build_adjacency()

        assert released == [0]
        assert not network_config.adjacency_path.exists()

    def test_safe_variant_returns_message(self, service):
        summary, error = service.build_adjacency_safe()

        assert summary is None
        assert error is not None and "Error opening network file" in error


class TestAnalyze:
    def test_runs_all_trials(self, built_service):
        analysis = built_service.analyze(1, 3)

        assert analysis.start == 1
        assert [t.trial for t in analysis.trials] == [1, 2, 3]
        assert analysis.node_count == 4
        assert analysis.counters_consistent

        last = analysis.trial(3)
        assert last.distances[3] == 10
        assert last.parents[3] == 2
        assert not last.is_reachable(4)

    def test_trials_are_identical(self, built_service):
        analysis = built_service.analyze(1, 2)
        first, second = analysis.trials

        assert first.distances == second.distances
        assert first.times == second.times
        assert first.parents == second.parents

    def test_reports_written(self, built_service, report_config):
        analysis = built_service.analyze(1, 2)

        assert set(analysis.report_paths) == {
            report_config.paths_path,
            report_config.performance_path,
            report_config.details_path,
        }
        assert len(report_config.performance_path.read_text().splitlines()) == 3
        assert len(report_config.details_path.read_text().splitlines()) == 1 + 2 * 3
        assert "1;3;1->2->3;10;2.00" in report_config.paths_path.read_text()

    def test_history_accumulates(self, built_service):
        built_service.analyze(1, 1)
        built_service.analyze(4, 2)

        assert [a.start for a in built_service.history] == [1, 4]
        assert built_service.history[1].trial(2).distances[3] == 13

    def test_trial_index_out_of_range(self, built_service):
        analysis = built_service.analyze(1, 1)

        with pytest.raises(IndexError):
            analysis.trial(2)

    def test_store_is_released(self, built_service, released):
        built_service.analyze(1, 2)

        assert released == [4]

    def test_missing_adjacency_file(self, service, report_config, released):
        with pytest.raises(AdjacencyFileMissingError):
            service.analyze(1, 1)

        assert released == [0]
        assert not report_config.performance_path.exists()

    def test_empty_adjacency_file(self, service, network_config):
        network_config.adjacency_path.write_text("")

        with pytest.raises(AdjacencyFileMissingError, match="No nodes"):
            service.analyze(1, 1)

    def test_unknown_start_node(self, built_service, report_config, released):
        with pytest.raises(StartNodeNotFoundError) as exc_info:
            built_service.analyze(99, 1)

        assert exc_info.value.node == 99
        assert released == [4]
        assert not report_config.paths_path.exists()
        assert built_service.history == []

    @pytest.mark.parametrize("trials", [0, -3])
    def test_invalid_trial_count(self, built_service, trials):
        with pytest.raises(InvalidTrialCountError):
            built_service.analyze(1, trials)

    def test_safe_variant_reports_errors(self, built_service):
        analysis, error = built_service.analyze_safe(99, 1)

        assert analysis is None
        assert error == "Start node 99 not found in the network"

    def test_check_start(self, built_service, released):
        assert built_service.check_start(1) is None
        assert built_service.check_start(99) == "Start node 99 not found in the network"
        assert released == [4, 4]

    def test_check_start_without_adjacency(self, service):
        assert "create it first" in service.check_start(1)

    def test_safe_variant_success(self, built_service):
        analysis, error = built_service.analyze_safe(1, 1)

        assert error is None
        assert analysis is not None and analysis.start == 1

    def test_undecodable_adjacency_bytes(self, service, network_config):
        network_config.adjacency_path.write_bytes(
            b"1;[2,5,1.00]\n\xff\xfe;[3,1,1.00]\n2;[3,5,1.00]\n"
        )

        analysis, error = service.analyze_safe(1, 1)

        assert error is None
        assert analysis.trial(1).distances[3] == 10

    def test_report_failure_is_not_swallowed(self, built_service, released):
        built_service.report_writer = FailingWriter()

        with pytest.raises(ReportWriteError):
            built_service.analyze_safe(1, 1)

        assert released == [4]
        assert built_service.history == []


def test_output_paths_are_paths(built_service):
    analysis = built_service.analyze(2, 1)
    assert all(isinstance(p, Path) for p in analysis.report_paths)
    assert analysis.trial(1).is_reachable(3)
    assert not analysis.trial(1).is_reachable(1)
