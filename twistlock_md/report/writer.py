"""Persist Markdown documents under their conventional file names."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .formatter import (
    COMPLIANCE_SUMMARY_TABLE,
    COMPLIANCE_TABLE,
    SUMMARY_TABLE,
    VULNERABILITY_TABLE,
    MarkdownReport,
)

logger = logging.getLogger(__name__)

FILE_NAMES = {
    VULNERABILITY_TABLE: "twistlock-vulnerability-table.md",
    COMPLIANCE_TABLE: "twistlock-compliance-table.md",
    COMPLIANCE_SUMMARY_TABLE: "twistlock-compliance-summary-table.md",
    SUMMARY_TABLE: "twistlock-summary-table.md",
}


class ReportWriter:
    """Write Markdown reports to disk and announce where they went.

    Existing files are overwritten on every run.

    Attributes:
        output_dir: Directory the documents are written to
        sink: Optional callback invoked with (artifact name, file path)
    """

    def __init__(
        self,
        output_dir: Union[str, Path] = ".",
        sink: Optional[Callable[[str, str], None]] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.sink = sink

    def write(self, report: MarkdownReport) -> Dict[str, Path]:
        """Write all four documents.

        Args:
            report: Documents to write

        Returns:
            Mapping of artifact name to written file path
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: Dict[str, Path] = {}
        for name, document in report.artifacts().items():
            path = self.output_dir / FILE_NAMES[name]
            path.write_text(document, encoding="utf-8")
            logger.debug(f"Wrote {name} to {path}")

            if self.sink is not None:
                self.sink(name, str(path))
            written[name] = path

        return written
