"""Layered configuration (defaults, YAML files, environment, CLI)."""

from pmon.config.settings import (
    ConfigService,
    DisplaySettings,
    GeneralSettings,
    RefreshSettings,
    Settings,
    config_service,
)

__all__ = [
    "ConfigService",
    "DisplaySettings",
    "GeneralSettings",
    "RefreshSettings",
    "Settings",
    "config_service",
]
