"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the analysis service and the
file-based adapters. They enable dependency injection and make the
service testable with in-memory fakes.
"""

from .network import AdjacencySinkPort, AdjacencySourcePort, EdgeSourcePort
from .reporting import ReportWriterPort

__all__ = [
    # Network
    "EdgeSourcePort",
    "AdjacencySourcePort",
    "AdjacencySinkPort",
    # Reporting
    "ReportWriterPort",
]
