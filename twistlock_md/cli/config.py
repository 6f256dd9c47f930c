"""Configuration loading for the twistlock-md CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_FILE = ".twistlock-md.yaml"
CONFIG_ENV_VAR = "TWISTLOCK_MD_CONFIG"


@dataclass
class Config:
    """CLI configuration.

    Precedence (lowest to highest): defaults, YAML config file, environment
    variables, command line options.

    Attributes:
        results_json_path: Scan results file to convert
        output_dir: Directory Markdown files are written to
        log_level: Default log level
        sort_severity: Order summary rows by severity rank
        strict: Exit non-zero when the report has no results
    """

    results_json_path: Optional[str] = None
    output_dir: str = "."
    log_level: str = "INFO"
    sort_severity: bool = False
    strict: bool = False

    @classmethod
    def load(cls, config_file: Optional[str] = None) -> Config:
        """Load configuration from file and environment.

        Args:
            config_file: Explicit YAML config path; falls back to
                ``$TWISTLOCK_MD_CONFIG`` then ``./.twistlock-md.yaml``

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If an explicitly requested config file is missing
            ValueError: If the config file is not a YAML mapping
        """
        config = cls()

        explicit = config_file or os.environ.get(CONFIG_ENV_VAR)
        path = Path(explicit) if explicit else Path(DEFAULT_CONFIG_FILE)
        if path.exists():
            config._apply(cls._read_yaml(path))
        elif explicit:
            raise FileNotFoundError(f"Config file not found: {path}")

        if os.environ.get("TWISTLOCK_MD_OUTPUT_DIR"):
            config.output_dir = os.environ["TWISTLOCK_MD_OUTPUT_DIR"]
        if os.environ.get("TWISTLOCK_MD_LOG_LEVEL"):
            config.log_level = os.environ["TWISTLOCK_MD_LOG_LEVEL"]

        return config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return data

    def _apply(self, data: Dict[str, Any]) -> None:
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            attr = key.replace("-", "_")
            if attr in known:
                setattr(self, attr, value)
