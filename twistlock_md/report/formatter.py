"""Convert Twistlock scan results into Markdown tables and summaries."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..models.scan_report import ComplianceFinding, ScanReport, ScanResult, Vulnerability
from .distribution import resolve_distribution, severity_rows, sort_by_rank
from .markdown import format_scan_time, render_table, truncate_description

logger = logging.getLogger(__name__)

OutputSink = Callable[[str, str], None]

VULNERABILITY_HEADERS = [
    "ID",
    "Status",
    "CVSS",
    "Severity",
    "Package Name",
    "Package Version",
    "Published Date",
    "Discovered Date",
    "Grace Days",
    "Fix Date",
]

COMPLIANCE_HEADERS = ["ID", "Title", "Severity", "Category", "Description", "Layer Time"]

SUMMARY_HEADERS = ["Severity", "Count"]

VULNERABILITY_TABLE = "vulnerability-table"
COMPLIANCE_TABLE = "compliance-table"
COMPLIANCE_SUMMARY_TABLE = "compliance-summary-table"
SUMMARY_TABLE = "summary-table"


@dataclass(frozen=True)
class MarkdownReport:
    """The four Markdown documents produced for one scan result."""

    vulnerability_table: str
    compliance_table: str
    summary_table: str
    compliance_summary_table: str

    def artifacts(self) -> Dict[str, str]:
        """Documents keyed by artifact name, in publishing order."""
        return {
            VULNERABILITY_TABLE: self.vulnerability_table,
            COMPLIANCE_TABLE: self.compliance_table,
            COMPLIANCE_SUMMARY_TABLE: self.compliance_summary_table,
            SUMMARY_TABLE: self.summary_table,
        }


class ReportFormatter:
    """Build Markdown documents from a parsed scan report."""

    def __init__(self, sort_by_rank: bool = False):
        """Initialize formatter.

        Args:
            sort_by_rank: Order summary rows from most to least severe instead
                of distribution order
        """
        self.sort_by_rank = sort_by_rank

    def format(self, report: ScanReport) -> Optional[MarkdownReport]:
        """Render the first scan result of a report.

        Args:
            report: Parsed scan report

        Returns:
            MarkdownReport, or None if the report has no results
        """
        result = report.first_result
        if result is None:
            logger.info("Scan report has no results, nothing to convert")
            return None

        logger.debug(
            f"Converting scan {result.scan_id}: {len(result.vulnerabilities)} vulnerabilities, "
            f"{len(result.compliances)} compliance findings"
        )

        # One metadata line for both summaries
        metadata = self.metadata_line(report, result)

        return MarkdownReport(
            vulnerability_table=self.vulnerability_table(result.vulnerabilities),
            compliance_table=self.compliance_table(result.compliances),
            summary_table=self.summary_table(result, metadata),
            compliance_summary_table=self.compliance_summary_table(result, metadata),
        )

    def vulnerability_table(self, vulnerabilities: List[Vulnerability]) -> str:
        """Render the vulnerability detail document."""
        rows = [
            {
                "ID": v.id,
                "Status": v.status,
                "CVSS": v.cvss,
                "Severity": v.severity,
                "Package Name": v.package_name,
                "Package Version": v.package_version,
                "Published Date": v.published_date,
                "Discovered Date": v.discovered_date,
                "Grace Days": v.grace_days,
                "Fix Date": v.fix_date,
            }
            for v in vulnerabilities
        ]
        table = render_table(VULNERABILITY_HEADERS, rows)
        return f"## Twistlock Vulnerabilities ({len(vulnerabilities)})\n\n{table}\n"

    def compliance_table(self, compliances: List[ComplianceFinding]) -> str:
        """Render the compliance finding detail document."""
        rows = [
            {
                "ID": c.id,
                "Title": c.title,
                "Severity": c.severity,
                "Category": c.category,
                "Description": truncate_description(c.description),
                "Layer Time": c.layer_time,
            }
            for c in compliances
        ]
        table = render_table(COMPLIANCE_HEADERS, rows)
        return f"## Twistlock Compliance Findings ({len(compliances)})\n\n{table}\n"

    def metadata_line(self, report: ScanReport, result: ScanResult) -> str:
        """Render the ``Scan: ...`` line with scan id, UTC scan time and console link."""
        scan_id = "" if result.scan_id is None else result.scan_id
        console_url = "" if report.console_url is None else report.console_url
        return (
            f"Scan: 💾 {scan_id} | 📅 {format_scan_time(result.scan_time)} | "
            f"🔗 [More Details]({console_url})"
        )

    def summary_table(self, result: ScanResult, metadata: str) -> str:
        """Render the vulnerability severity summary document."""
        distribution = resolve_distribution(result.vulnerabilities, result.vulnerability_distribution)
        return self._summary("Twistlock Scan Summary", metadata, distribution)

    def compliance_summary_table(self, result: ScanResult, metadata: str) -> str:
        """Render the compliance severity summary document."""
        distribution = resolve_distribution(result.compliances, result.compliance_distribution)
        return self._summary("Twistlock Compliance Summary", metadata, distribution)

    def _summary(self, heading: str, metadata: str, distribution: dict) -> str:
        if self.sort_by_rank:
            distribution = sort_by_rank(distribution)

        table = render_table(SUMMARY_HEADERS, severity_rows(distribution))
        return f"## {heading}\n\n{metadata}\n\n{table}\n"


def process_results(
    data: str,
    sink: Optional[OutputSink] = None,
    sort_by_rank: bool = False,
) -> Optional[MarkdownReport]:
    """Convert a JSON scan report into Markdown documents.

    Args:
        data: Scan report JSON text
        sink: Optional callback invoked with (artifact name, document) for
            each produced document
        sort_by_rank: Order summary rows by severity rank

    Returns:
        MarkdownReport, or None when the report has no usable results

    Raises:
        json.JSONDecodeError: If ``data`` is not valid JSON
    """
    obj = json.loads(data)

    if not isinstance(obj, dict):
        logger.info(f"Scan report is a JSON {type(obj).__name__}, expected an object")
        return None

    try:
        report = ScanReport.from_dict(obj)
    except ValueError as e:
        logger.info(f"Scan report has no usable results: {e}")
        return None

    markdown = ReportFormatter(sort_by_rank=sort_by_rank).format(report)
    if markdown is not None and sink is not None:
        for name, document in markdown.artifacts().items():
            sink(name, document)
    return markdown
