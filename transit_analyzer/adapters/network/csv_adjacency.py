"""CSV adjacency list adapter.

One line per node, neighbors as bracketed triples:

    12;[15,450,61.50];[18,300,42.00]

The same file is written after the raw edges are ingested and read back
at the start of every analysis session.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ...config import NetworkConfig, get_config
from ...domain.errors import AdjacencyFileMissingError
from ...graph.store import GraphStore
from ..files import atomic_writer

_NEIGHBOR = re.compile(
    r"\s*\[\s*([-+]?\d+)\s*,\s*([-+]?\d+)\s*,\s*"
    r"([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*\]\s*"
)


def parse_neighbor(token: str) -> Optional[Tuple[int, int, float]]:
    """Parse ``[target,distance,time]``, returning None when malformed."""
    match = _NEIGHBOR.fullmatch(token)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2)), float(match.group(3))


def format_neighbor(target: int, distance: int, time: float) -> str:
    return f"[{target},{distance},{time:.2f}]"


@dataclass
class CSVAdjacencyRepository:
    """Reads and writes the adjacency list file.

    This adapter implements both AdjacencySourcePort and AdjacencySinkPort.

    Attributes:
        config: Network configuration (data directory, file names)
    """

    config: NetworkConfig = field(default_factory=lambda: get_config().network)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self.config.adjacency_path

    def exists(self) -> bool:
        return self.path.is_file()

    def load_into(self, store: GraphStore) -> int:
        """Populate store from the adjacency file.

        Every node line registers its node, even when none of its
        neighbor tokens parse. Malformed tokens and lines, including
        undecodable bytes, are skipped.

        Returns:
            Number of node lines loaded.

        Raises:
            AdjacencyFileMissingError: If the file does not exist.
        """
        path = self.path
        self._logger.debug("Loading adjacency list", extra={"path": str(path)})

        try:
            f = path.open(newline="", encoding="utf-8", errors="replace")
        except OSError as e:
            raise AdjacencyFileMissingError(
                f"Adjacency list {path} not found, create it first",
                file_path=str(path),
                cause=e,
            )

        loaded = 0
        with f:
            reader = csv.reader(f, delimiter=";")
            for row in reader:
                if not row or not row[0].strip():
                    continue

                try:
                    node = int(row[0])
                except ValueError:
                    self._logger.warning(
                        "Skipping adjacency line with invalid node",
                        extra={"line": reader.line_num, "token": row[0][:40]},
                    )
                    continue

                store.add_node(node)
                loaded += 1

                for token in row[1:]:
                    if not token.strip():
                        continue
                    neighbor = parse_neighbor(token)
                    if neighbor is None:
                        self._logger.warning(
                            "Skipping invalid neighbor",
                            extra={"line": reader.line_num, "token": token[:40]},
                        )
                        continue
                    target, distance, time = neighbor
                    store.insert_edge(node, target, distance, time)

        self._logger.info(
            "Adjacency list loaded",
            extra={
                "path": str(path),
                "nodes": store.node_count,
                "edges": store.edge_count,
            },
        )
        return loaded

    def write(self, store: GraphStore) -> Path:
        """Dump every node with outgoing edges, in ascending node order.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        path = self.path
        self._logger.info("Writing adjacency list", extra={"path": str(path)})

        with atomic_writer(path) as f:
            writer = csv.writer(f, delimiter=";", lineterminator="\n")
            for node in store.sources():
                writer.writerow(
                    [node]
                    + [
                        format_neighbor(e.target, e.distance, e.time)
                        for e in store.neighbors(node)
                    ]
                )

        return path
