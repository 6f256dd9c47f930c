"""GitHub Actions integration: action inputs and step outputs."""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Callable, Optional

RESULTS_JSON_PATH_INPUT = "results-json-path"


def get_action_input(name: str) -> Optional[str]:
    """Read an action input the way the Actions runner exposes it.

    Inputs are passed as ``INPUT_<NAME>`` environment variables with the
    name upper-cased and spaces replaced by underscores (hyphens are kept).

    Returns:
        Stripped value, or None when unset or blank
    """
    value = os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    return value or None


def set_output(name: str, value: str, output_file: Optional[str] = None) -> None:
    """Append a step output to the ``$GITHUB_OUTPUT`` file.

    Multi-line values use the heredoc delimiter syntax.

    Raises:
        ValueError: If no output file is configured
    """
    output_file = output_file or os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        raise ValueError("GITHUB_OUTPUT is not set")

    with open(Path(output_file), "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")


def github_output_sink() -> Optional[Callable[[str, str], None]]:
    """Build an output sink bound to the current ``$GITHUB_OUTPUT`` file.

    Returns:
        Sink callable, or None when not running inside GitHub Actions
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        return None

    def sink(name: str, value: str) -> None:
        set_output(name, value, output_file)

    return sink
