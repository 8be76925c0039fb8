"""CLI utility functions for configuration overrides and verbosity handling."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pmon.config.settings import Settings, config_service

_LEVELS = ["critical", "error", "warning", "info", "debug"]


def compute_verbosity(base_level: str, verbose: int, quiet: int) -> str:
    idx = (
        _LEVELS.index(base_level.lower())
        if base_level.lower() in _LEVELS
        else _LEVELS.index("warning")
    )
    idx = max(0, min(len(_LEVELS) - 1, idx + verbose - quiet))
    return _LEVELS[idx]


def load_settings_with_cli_overrides(
    *,
    config_path: Path | None = None,
    verbose: int = 0,
    quiet: int = 0,
    cli_overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings, then apply an optional extra config file, -v/-q and flags."""

    base = config_service.load(extra_config=config_path)
    overrides: dict[str, Any] = {**(cli_overrides or {})}
    general = {**overrides.get("general", {})}
    general["verbosity"] = compute_verbosity(base.general.verbosity, verbose, quiet)
    overrides["general"] = general
    return config_service.load(overrides, extra_config=config_path)
