"""Twistlock scan results to Markdown converter."""

__version__ = "1.0.0"
