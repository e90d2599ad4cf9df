"""Services layer - Application orchestration.

Available services:
- NetworkAnalyzerService: Builds the adjacency list and runs analyses
"""

from .network_analyzer import NetworkAnalyzerService

__all__ = ["NetworkAnalyzerService"]
