"""Default configuration values and constants for configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default configuration tree used when no files are present.
DEFAULT_CONFIG: dict[str, Any] = {
    "general": {
        "verbosity": "warning",
        "output_format": "text",
        "color_enabled": True,
        "log_file": "",
    },
    "display": {
        "style": "default",
        "title": None,
    },
    "refresh": {
        # Seconds between redraws, 1..59
        "interval_seconds": 5,
    },
}


ENV_PREFIX = "PMON"
USER_CONFIG_PATH = Path.home() / ".pmon" / "config.yaml"
PROJECT_CONFIG_FILENAME = "pmon.yaml"

MIN_INTERVAL_SECONDS = 1
MAX_INTERVAL_SECONDS = 59
