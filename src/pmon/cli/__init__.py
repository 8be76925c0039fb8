"""CLI module for pmon.

This module provides:
- Main CLI application entry point
- Terminal display sink and keyboard cancel source
"""

from pmon.cli.main import app

__all__ = ["app"]
