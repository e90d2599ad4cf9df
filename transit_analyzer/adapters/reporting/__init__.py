"""Reporting adapters - Implementations of ReportWriterPort.

Available implementations:
- CSVReportWriter: Writes path, performance and detail reports as CSV
"""

from .csv_report_writer import CSVReportWriter

__all__ = ["CSVReportWriter"]
