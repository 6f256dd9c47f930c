"""Markdown table rendering and cell formatting helpers."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from ..models.scan_report import MISSING

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 100

# Older fromisoformat() only accepts 3 or 6 fractional digits; Twistlock may emit nanoseconds
_FRACTION_RE = re.compile(r"\.(\d+)")

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def render_cell(value: Any) -> str:
    """Render a single field value as table cell text.

    None, absent fields and empty strings become an empty cell. Pipes are escaped and
    newlines collapsed so the row stays on one line.
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return _LINE_BREAK_RE.sub(" ", text).replace("|", "\\|")


def render_table(headers: Sequence[str], rows: Sequence[Dict[str, Any]]) -> str:
    """Render records as a Markdown table.

    Args:
        headers: Column labels, in display order
        rows: Records keyed by column label; missing keys render empty

    Returns:
        Markdown table text (header and separator only when there are no rows)
    """
    lines: List[str] = [
        _row([render_cell(header) for header in headers]),
        _row(["---"] * len(headers)),
    ]
    for row in rows:
        lines.append(_row([render_cell(row.get(header)) for header in headers]))
    return "\n".join(lines)


def _row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def truncate_description(description: Any, limit: int = DESCRIPTION_LIMIT) -> str:
    """Flatten a description to one line and cut it to ``limit`` characters.

    Descriptions longer than the limit get a ``...`` suffix.
    """
    if description is None or description == "":
        return ""
    text = _LINE_BREAK_RE.sub(" ", str(description))
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_scan_time(scan_time: Any) -> str:
    """Format an ISO-8601 timestamp as ``YYYY-MM-DD HH:MM`` in UTC.

    Timestamps without an offset are taken as UTC. Missing or unparseable
    values yield an empty string.
    """
    if not scan_time:
        logger.warning("Scan result has no scanTime")
        return ""

    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), str(scan_time).strip(), count=1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Could not parse scanTime: {scan_time}")
        return ""

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")
