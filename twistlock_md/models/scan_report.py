"""Scan report model mirroring the twistcli / Prisma Cloud JSON results format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class _Missing:
    """Marker for a field absent from the report (as opposed to an explicit null)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Vulnerability:
    """A package-level vulnerability (CVE) finding.

    All attributes are optional; values are kept exactly as they appear in the
    report so that rendering decides how to display them.
    """

    id: Any = None
    status: Any = None
    cvss: Any = None
    severity: Any = MISSING
    package_name: Any = None
    package_version: Any = None
    published_date: Any = None
    discovered_date: Any = None
    grace_days: Any = None
    fix_date: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Vulnerability:
        """Create a Vulnerability from a report entry."""
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            cvss=data.get("cvss"),
            severity=data.get("severity", MISSING),
            package_name=data.get("packageName"),
            package_version=data.get("packageVersion"),
            published_date=data.get("publishedDate"),
            discovered_date=data.get("discoveredDate"),
            grace_days=data.get("graceDays"),
            fix_date=data.get("fixDate"),
        )


@dataclass(frozen=True)
class ComplianceFinding:
    """A compliance (policy or configuration check) finding."""

    id: Any = None
    title: Any = None
    severity: Any = MISSING
    category: Any = None
    description: Any = None
    layer_time: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ComplianceFinding:
        """Create a ComplianceFinding from a report entry."""
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            severity=data.get("severity", MISSING),
            category=data.get("category"),
            description=data.get("description"),
            layer_time=data.get("layerTime"),
        )


@dataclass(frozen=True)
class ScanResult:
    """Findings and metadata for a single image scan.

    Attributes:
        id: Image identifier
        scan_id: Identifier of the scan run
        scan_time: ISO-8601 timestamp string of the scan
        vulnerabilities: Vulnerability findings in report order
        vulnerability_distribution: Precomputed severity counts, if supplied
        compliances: Compliance findings in report order
        compliance_distribution: Precomputed severity counts, if supplied
    """

    id: Any = None
    scan_id: Any = None
    scan_time: Any = None
    vulnerabilities: List[Vulnerability] = field(default_factory=list)
    vulnerability_distribution: Optional[Dict[str, Any]] = None
    compliances: List[ComplianceFinding] = field(default_factory=list)
    compliance_distribution: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScanResult:
        """Create a ScanResult from one element of the report's ``results`` list.

        Missing, null or non-list finding lists are treated as empty. Distributions are
        kept verbatim when present (including an empty mapping).
        """
        return cls(
            id=data.get("id"),
            scan_id=data.get("scanID"),
            scan_time=data.get("scanTime"),
            vulnerabilities=[Vulnerability.from_dict(v) for v in _entries(data.get("vulnerabilities"))],
            vulnerability_distribution=_distribution(data.get("vulnerabilityDistribution")),
            compliances=[ComplianceFinding.from_dict(c) for c in _entries(data.get("compliances"))],
            compliance_distribution=_distribution(data.get("complianceDistribution")),
        )


@dataclass(frozen=True)
class ScanReport:
    """Top-level scan report as produced by ``twistcli images scan --output-file``."""

    console_url: Any = None
    results: List[ScanResult] = field(default_factory=list)

    @property
    def first_result(self) -> Optional[ScanResult]:
        """The scan result that gets rendered (only the first one is used)."""
        return self.results[0] if self.results else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScanReport:
        """Create a ScanReport from the decoded JSON document.

        Raises:
            ValueError: If ``results`` is not a list of objects
        """
        results = data.get("results")
        if not isinstance(results, list):
            raise ValueError(f"Invalid results type: {type(results).__name__}. Must be a list.")
        if not all(isinstance(r, dict) for r in results):
            raise ValueError("Every entry in results must be an object")

        return cls(
            console_url=data.get("consoleURL"),
            results=[ScanResult.from_dict(r) for r in results],
        )


def _distribution(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _entries(value: Any) -> List[Dict[str, Any]]:
    # A non-list value means no findings; non-object entries count but carry no fields
    if not isinstance(value, list):
        return []
    return [entry if isinstance(entry, dict) else {} for entry in value]
