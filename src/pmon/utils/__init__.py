"""Utility helpers."""

from pmon.utils.logging import configure_from_settings, configure_logging, get_logger

__all__ = ["configure_from_settings", "configure_logging", "get_logger"]
