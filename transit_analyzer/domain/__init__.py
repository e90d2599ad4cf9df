"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AdjacencyFileMissingError,
    ConfigurationError,
    InvalidTrialCountError,
    NetworkFileError,
    ReportWriteError,
    StartNodeNotFoundError,
    TransitAnalyzerError,
)
from .models import (
    UNREACHABLE,
    AnalysisResult,
    BuildSummary,
    Edge,
    EdgeRecord,
    PathTrace,
    PerformanceCounters,
    TrialResult,
)

__all__ = [
    # Models
    "UNREACHABLE",
    "Edge",
    "EdgeRecord",
    "PerformanceCounters",
    "TrialResult",
    "PathTrace",
    "BuildSummary",
    "AnalysisResult",
    # Errors
    "TransitAnalyzerError",
    "NetworkFileError",
    "AdjacencyFileMissingError",
    "StartNodeNotFoundError",
    "InvalidTrialCountError",
    "ReportWriteError",
    "ConfigurationError",
]
