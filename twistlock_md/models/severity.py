"""Severity levels reported by Twistlock and their display symbols."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(Enum):
    """Known Twistlock severity levels, ordered from most to least severe."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    HIGH = "high"
    MEDIUM = "medium"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def symbol(self) -> str:
        """Emoji prefix shown in summary tables."""
        return _SYMBOLS[self]

    @property
    def rank(self) -> int:
        """Position in severity order (0 is most severe)."""
        return list(Severity).index(self)

    @classmethod
    def lookup(cls, name: Any) -> Optional[Severity]:
        """Return the Severity for an exact, case-sensitive name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None


_SYMBOLS = {
    Severity.CRITICAL: "‼️",
    Severity.IMPORTANT: "❌",
    Severity.HIGH: "⛔️",
    Severity.MEDIUM: "⚠️",
    Severity.MODERATE: "⚠️",
    Severity.LOW: "🟡",
}


def symbol_for(name: Any) -> str:
    """Get the symbol for a severity name.

    Args:
        name: Severity name as found in the scan report (case-sensitive)

    Returns:
        Emoji symbol, or an empty string for unknown severities
    """
    severity = Severity.lookup(name)
    return severity.symbol if severity else ""
