"""Tests for the adjacency list CSV repository."""

import pytest

from transit_analyzer.adapters.network.csv_adjacency import (
    CSVAdjacencyRepository,
    format_neighbor,
    parse_neighbor,
)
from transit_analyzer.config import NetworkConfig
from transit_analyzer.domain.errors import AdjacencyFileMissingError
from transit_analyzer.domain.models import Edge
from transit_analyzer.graph.store import GraphStore


@pytest.fixture
def repository(tmp_path) -> CSVAdjacencyRepository:
    return CSVAdjacencyRepository(NetworkConfig(data_dir=tmp_path))


def test_parse_neighbor():
    assert parse_neighbor("[15,450,61.50]") == (15, 450, 61.5)
    assert parse_neighbor(" [ 15 , 450 , 61 ] ") == (15, 450, 61.0)
    assert parse_neighbor("[15,450]") is None
    assert parse_neighbor("15,450,61.5") is None
    assert parse_neighbor("[a,450,61.5]") is None


def test_format_neighbor_uses_two_decimals():
    assert format_neighbor(3, 11, 0.5) == "[3,11,0.50]"


def test_write_encoding(repository):
    store = GraphStore()
    store.insert_edge(2, 3, 5, 1.0)
    store.insert_edge(1, 2, 5, 1.0)
    store.insert_edge(1, 3, 11, 0.5)

    path = repository.write(store)

    assert path == repository.path
    assert path.read_text() == "1;[2,5,1.00];[3,11,0.50]\n2;[3,5,1.00]\n"


def test_write_then_load_round_trip(repository):
    store = GraphStore()
    store.insert_edge(1, 2, 5, 1.25)
    store.insert_edge(2, 3, 7, 0.75)
    store.insert_edge(3, 1, 2, 3.0)
    repository.write(store)

    loaded = GraphStore()
    lines = repository.load_into(loaded)

    assert lines == 3
    assert set(loaded.nodes()) == {1, 2, 3}
    assert loaded.edge(1, 2) == Edge(2, 5, 1.25)
    assert loaded.edge(2, 3) == Edge(3, 7, 0.75)
    assert loaded.edge(3, 1) == Edge(1, 2, 3.0)


def test_load_registers_nodes_and_targets(repository):
    repository.path.write_text("1;[2,5,1.00]\n7\n\n")

    store = GraphStore()
    repository.load_into(store)

    assert store.nodes() == [1, 2, 7]
    assert store.neighbors(7) == ()


def test_load_skips_malformed_tokens_and_lines(repository, caplog):
    repository.path.write_text("1;[2,5,1.00];[oops];[3,4]\nabc;[1,2,3.0]\n2;[1,1,1.00]\n")

    store = GraphStore()
    lines = repository.load_into(store)

    assert lines == 2
    assert [e.target for e in store.neighbors(1)] == [2]
    assert store.edge(2, 1) == Edge(1, 1, 1.0)
    assert "Skipping invalid neighbor" in caplog.text
    assert "Skipping adjacency line with invalid node" in caplog.text


def test_load_skips_undecodable_bytes(repository, caplog):
    repository.path.write_bytes(
        b"1;[2,5,1.00]\n\xff\xfe;[3,1,1.00]\n2;[3,5,1.00];[4\xe9,1,1.00]\n"
    )

    store = GraphStore()
    lines = repository.load_into(store)

    assert lines == 2
    assert store.nodes() == [1, 2, 3]
    assert store.edge(2, 3) == Edge(3, 5, 1.0)
    assert "Skipping adjacency line with invalid node" in caplog.text
    assert "Skipping invalid neighbor" in caplog.text


def test_load_relaxes_duplicates(repository):
    repository.path.write_text("1;[2,9,1.00];[2,5,4.00];[2,5,2.00]\n")

    store = GraphStore()
    repository.load_into(store)

    assert store.neighbors(1) == (Edge(2, 5, 2.0),)


def test_missing_file(repository):
    assert not repository.exists()

    with pytest.raises(AdjacencyFileMissingError):
        repository.load_into(GraphStore())
