"""Utility functions and configuration management."""

from ecf_insight.utils.config import get_settings
from ecf_insight.utils.logging import setup_logging

__all__ = ["get_settings", "setup_logging"]
