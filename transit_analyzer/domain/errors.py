"""Typed domain errors for the Transit Path Analyzer.

Recoverable conditions (missing input files, unknown start nodes, bad
trial counts) are raised as typed errors so the service layer can turn
them into status messages. Output failures are unrecoverable and abort
the running operation.

All errors inherit from TransitAnalyzerError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransitAnalyzerError(Exception):
    """Base error for the transit analyzer domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class NetworkFileError(TransitAnalyzerError):
    """The raw network file is missing or unreadable.

    Attributes:
        file_path: Path to the network file
    """

    file_path: Optional[str] = None


@dataclass
class AdjacencyFileMissingError(TransitAnalyzerError):
    """An analysis was requested before the adjacency file was built.

    Attributes:
        file_path: Path where the adjacency file was expected
    """

    file_path: Optional[str] = None


@dataclass
class StartNodeNotFoundError(TransitAnalyzerError):
    """The requested start node does not appear in the loaded network.

    Attributes:
        node: The node id that was not found
    """

    node: Optional[int] = None


@dataclass
class InvalidTrialCountError(TransitAnalyzerError):
    """The number of trials requested is not a positive integer."""

    trials: int = 0


@dataclass
class ReportWriteError(TransitAnalyzerError):
    """An output report could not be written.

    Unlike the other errors this one is not recoverable: the current
    operation is aborted and the CLI exits with a non-zero status.

    Attributes:
        file_path: Path of the report being written
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(TransitAnalyzerError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Dotted name of the rejected setting
    """

    setting_name: str = ""
