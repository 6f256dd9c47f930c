"""Data models for Twistlock/Prisma Cloud scan reports."""

from .scan_report import MISSING, ComplianceFinding, ScanReport, ScanResult, Vulnerability
from .severity import Severity, symbol_for

__all__ = [
    "MISSING",
    "ComplianceFinding",
    "ScanReport",
    "ScanResult",
    "Severity",
    "Vulnerability",
    "symbol_for",
]
