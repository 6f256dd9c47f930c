"""Unit tests for scan report models."""

from __future__ import annotations

import pytest

from tests.fixtures.reports import (
    create_compliance,
    create_scan_report,
    create_scan_result,
    create_vulnerability,
)
from twistlock_md.models.scan_report import MISSING, ComplianceFinding, ScanReport, ScanResult, Vulnerability


class TestVulnerability:
    """Tests for Vulnerability.from_dict."""

    def test_maps_report_keys(self) -> None:
        """Test that camelCase report keys map onto attributes."""
        vuln = Vulnerability.from_dict(create_vulnerability("CVE-2024-0001", "high", 7.5))

        assert vuln.id == "CVE-2024-0001"
        assert vuln.severity == "high"
        assert vuln.cvss == 7.5
        assert vuln.package_name == "test-package"
        assert vuln.package_version == "1.2.3"
        assert vuln.grace_days == 30
        assert vuln.fix_date == "2024-02-01T00:00:00Z"

    def test_missing_fields_are_none(self) -> None:
        """Test that absent fields stay None."""
        vuln = Vulnerability.from_dict({})

        assert vuln.id is None
        assert vuln.severity is MISSING
        assert vuln.cvss is None


class TestComplianceFinding:
    """Tests for ComplianceFinding.from_dict."""

    def test_maps_report_keys(self) -> None:
        """Test that compliance keys map onto attributes."""
        finding = ComplianceFinding.from_dict(create_compliance(425, "medium", "desc"))

        assert finding.id == 425
        assert finding.severity == "medium"
        assert finding.description == "desc"
        assert finding.layer_time == "2024-08-27T11:02:19Z"


class TestScanResult:
    """Tests for ScanResult.from_dict."""

    def test_missing_finding_lists_are_empty(self) -> None:
        """Test that absent vulnerabilities/compliances become empty lists."""
        result = ScanResult.from_dict(create_scan_result())

        assert result.vulnerabilities == []
        assert result.compliances == []
        assert result.vulnerability_distribution is None
        assert result.compliance_distribution is None

    def test_null_finding_lists_are_empty(self) -> None:
        """Test that explicit nulls are treated like absent lists."""
        result = ScanResult.from_dict({"vulnerabilities": None, "compliances": None})

        assert result.vulnerabilities == []
        assert result.compliances == []

    def test_explicit_null_severity_differs_from_absent(self) -> None:
        """Test that severity: null is kept apart from a missing severity."""
        assert Vulnerability.from_dict({"severity": None}).severity is None
        assert ComplianceFinding.from_dict({}).severity is MISSING

    @pytest.mark.parametrize("value", [5, "CVE-2024-1234", {"id": "CVE-2024-1234"}, True])
    def test_non_list_finding_collections_are_empty(self, value: object) -> None:
        """Test that non-list vulnerabilities/compliances mean no findings."""
        result = ScanResult.from_dict({"vulnerabilities": value, "compliances": value})

        assert result.vulnerabilities == []
        assert result.compliances == []

    def test_non_object_entries_count_as_empty_findings(self) -> None:
        """Test that malformed entries still count but carry no fields."""
        result = ScanResult.from_dict({"vulnerabilities": [create_vulnerability(), "bogus"]})

        assert len(result.vulnerabilities) == 2
        assert result.vulnerabilities[1] == Vulnerability()

    def test_distributions_kept_verbatim(self) -> None:
        """Test that supplied distributions are not altered, even when empty."""
        result = ScanResult.from_dict(
            create_scan_result(
                vulnerability_distribution={"critical": 5, "total": 5},
                compliance_distribution={},
            )
        )

        assert result.vulnerability_distribution == {"critical": 5, "total": 5}
        assert result.compliance_distribution == {}

    def test_scan_metadata(self) -> None:
        """Test that scan identifiers and time are read."""
        result = ScanResult.from_dict(create_scan_result(scan_id="abc", scan_time="2024-01-01T00:00:00Z"))

        assert result.scan_id == "abc"
        assert result.scan_time == "2024-01-01T00:00:00Z"


class TestScanReport:
    """Tests for ScanReport.from_dict."""

    def test_from_dict(self) -> None:
        """Test parsing a report with one result."""
        report = ScanReport.from_dict(create_scan_report())

        assert report.console_url == "https://console.example.com/compute"
        assert len(report.results) == 1
        assert report.first_result is report.results[0]

    def test_empty_results_have_no_first_result(self) -> None:
        """Test that an empty results list parses but yields nothing to render."""
        report = ScanReport.from_dict(create_scan_report(results=[]))

        assert report.first_result is None

    @pytest.mark.parametrize("results", [None, "results", {"id": "x"}, 3])
    def test_results_must_be_a_list(self, results: object) -> None:
        """Test that non-list results are rejected."""
        with pytest.raises(ValueError, match="Must be a list"):
            ScanReport.from_dict({"results": results})

    def test_missing_results_rejected(self) -> None:
        """Test that a report without results is rejected."""
        with pytest.raises(ValueError):
            ScanReport.from_dict({"consoleURL": "https://example.com"})

    def test_results_entries_must_be_objects(self) -> None:
        """Test that non-object results are rejected."""
        with pytest.raises(ValueError, match="must be an object"):
            ScanReport.from_dict({"results": ["not-an-object"]})
