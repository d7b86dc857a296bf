"""Utility functions."""

from .helpers import setup_logging, format_timestamp

__all__ = ["setup_logging", "format_timestamp"]
