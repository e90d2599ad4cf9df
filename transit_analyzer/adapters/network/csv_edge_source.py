"""CSV edge source adapter.

Reads the raw network export, one directed edge per line:

    from_stop_I;to_stop_I;...{'d': 450, 'duration_avg': 61.5, ...}

The first two ``;``-separated fields are the endpoint ids. Distance and
time are taken from the ``'d':`` and ``'duration_avg':`` keys wherever
they appear later on the line. The header line is skipped, and lines
missing any of these values are logged and skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ...config import NetworkConfig, get_config
from ...domain.errors import NetworkFileError
from ...domain.models import EdgeRecord

_ENDPOINTS = re.compile(r"\s*([-+]?\d+)\s*;\s*([-+]?\d+)\s*;")
_DURATION = re.compile(r"'duration_avg':\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_DISTANCE = re.compile(r"'d':\s*([-+]?\d+)")


def parse_edge_line(line: str) -> Optional[EdgeRecord]:
    """Parse one record line, returning None when it is malformed."""
    endpoints = _ENDPOINTS.match(line)
    if endpoints is None:
        return None

    duration = _DURATION.search(line)
    distance = _DISTANCE.search(line)
    if duration is None or distance is None:
        return None

    return EdgeRecord(
        source=int(endpoints.group(1)),
        target=int(endpoints.group(2)),
        distance=int(distance.group(1)),
        time=float(duration.group(1)),
    )


@dataclass
class CSVEdgeSource:
    """Edge source reading the raw network CSV export.

    This adapter implements EdgeSourcePort.

    Attributes:
        config: Network configuration (data directory, file names)
    """

    config: NetworkConfig = field(default_factory=lambda: get_config().network)
    _skipped: int = field(default=0, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def skipped(self) -> int:
        return self._skipped

    def iter_edges(self) -> Iterator[EdgeRecord]:
        """Yield every well-formed edge record in file order.

        Raises:
            NetworkFileError: If the file cannot be opened or has no header.
        """
        path = self.config.network_path
        self._skipped = 0

        self._logger.info("Loading edges", extra={"path": str(path)})

        try:
            f = path.open(encoding="utf-8", errors="replace")
        except OSError as e:
            raise NetworkFileError(
                f"Error opening network file {path}",
                file_path=str(path),
                cause=e,
            )

        with f:
            if not f.readline():
                raise NetworkFileError(
                    f"Error reading header line of {path}",
                    file_path=str(path),
                )

            for line_no, line in enumerate(f, start=2):
                if not line.strip():
                    continue

                record = parse_edge_line(line)
                if record is None:
                    self._skipped += 1
                    self._logger.warning(
                        "Skipping invalid edge line",
                        extra={"line": line_no, "content": line.strip()[:80]},
                    )
                    continue

                yield record

        self._logger.info(
            "Edges loaded",
            extra={"path": str(path), "skipped": self._skipped},
        )
