"""Markdown report generation."""

from .formatter import MarkdownReport, ReportFormatter, process_results
from .writer import ReportWriter

__all__ = ["MarkdownReport", "ReportFormatter", "ReportWriter", "process_results"]
