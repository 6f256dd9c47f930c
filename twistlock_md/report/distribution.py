"""Severity distribution resolution for vulnerability and compliance findings."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models.scan_report import MISSING
from ..models.severity import Severity, symbol_for


def resolve_distribution(findings: Iterable[Any], supplied: Optional[Dict[Any, Any]] = None) -> Dict[Any, Any]:
    """Get the severity -> count mapping for a list of findings.

    A distribution supplied by the scanner is trusted and returned unchanged.
    Otherwise findings are counted by their ``severity`` attribute, keeping
    first-seen order. An absent severity is counted under ``MISSING`` and an
    explicit null under ``None``; list or object severities are keyed by their
    JSON text.

    Args:
        findings: Vulnerability or compliance findings
        supplied: Distribution from the scan result, if any

    Returns:
        Mapping of severity name to count
    """
    if supplied is not None:
        return supplied

    counts: Dict[Any, int] = {}
    for finding in findings:
        severity = _bucket(finding.severity)
        counts[severity] = counts.get(severity, 0) + 1
    return counts


def sort_by_rank(distribution: Dict[Any, Any]) -> Dict[Any, Any]:
    """Reorder a distribution from most to least severe.

    Unknown severity names keep their relative order after the known ones.
    """
    last = len(Severity)

    def rank(item: Tuple[int, Tuple[Any, Any]]) -> Tuple[int, int]:
        position, (name, _) = item
        severity = Severity.lookup(name)
        return (severity.rank if severity else last, position)

    ordered = sorted(enumerate(distribution.items()), key=rank)
    return {name: count for _, (name, count) in ordered}


def severity_rows(distribution: Dict[Any, Any]) -> List[Dict[str, Any]]:
    """Build ``Severity``/``Count`` table rows with symbol-prefixed severity names."""
    rows = []
    for name, count in distribution.items():
        label = _label(name)
        rows.append({"Severity": f"{symbol_for(name)} {label}", "Count": count})
    return rows


def _bucket(severity: Any) -> Any:
    if isinstance(severity, (list, dict)):
        return json.dumps(severity, sort_keys=True)
    return severity


def _label(name: Any) -> str:
    if name is MISSING:
        return ""
    if name is None:
        return "null"
    return str(name)
