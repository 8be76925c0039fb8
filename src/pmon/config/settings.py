"""Configuration system for pmon.

Implements layered configuration with the following priority (high → low):
1) CLI overrides (explicit flags)
2) Environment variables (prefix: PMON_)
3) User config file (~/.pmon/config.yaml)
4) Project config file (./pmon.yaml)
5) Built-in defaults (fallback)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from pmon.config.defaults import (
    DEFAULT_CONFIG,
    ENV_PREFIX,
    MAX_INTERVAL_SECONDS,
    MIN_INTERVAL_SECONDS,
    PROJECT_CONFIG_FILENAME,
    USER_CONFIG_PATH,
)


class GeneralSettings(BaseModel):
    verbosity: str = Field(default="warning")
    output_format: str = Field(default="text")
    color_enabled: bool = Field(default=True)
    log_file: str = Field(default="")


class DisplaySettings(BaseModel):
    style: str = Field(default="default")
    title: str | None = Field(default=None)


class RefreshSettings(BaseModel):
    interval_seconds: int = Field(default=5, ge=MIN_INTERVAL_SECONDS, le=MAX_INTERVAL_SECONDS)


class Settings(BaseModel):
    general: GeneralSettings
    display: DisplaySettings
    refresh: RefreshSettings

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        return cls.model_validate(data)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, returning a new dict."""

    result = {**base}
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def _parse_scalar(value: str) -> Any:
    """Best-effort parsing for CLI/env string values."""

    trimmed = value.strip()
    # Try JSON (covers numbers, booleans, null, quoted strings)
    try:
        return json.loads(trimmed)
    except json.JSONDecodeError:
        pass

    lowered = trimmed.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"none", "null"}:
        return None
    return trimmed


def _set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    current = target
    for key in path[:-1]:
        current = current.setdefault(key, {})
    current[path[-1]] = value


class ConfigService:
    """Loads and merges pmon configuration."""

    def __init__(
        self,
        env_prefix: str = ENV_PREFIX,
        *,
        user_config_path: Path | None = None,
        project_dir: Path | None = None,
    ):
        self.env_prefix = env_prefix
        self.user_config_path = user_config_path or USER_CONFIG_PATH
        self._project_dir = project_dir

    @property
    def project_config_path(self) -> Path:
        return (self._project_dir or Path.cwd()) / PROJECT_CONFIG_FILENAME

    def load(
        self,
        cli_overrides: dict[str, Any] | None = None,
        *,
        extra_config: Path | None = None,
    ) -> Settings:
        data = DEFAULT_CONFIG

        file_chain = [self.project_config_path, self.user_config_path]
        if extra_config is not None:
            if not extra_config.exists():
                raise ValueError(f"Config file not found: {extra_config}")
            file_chain.append(extra_config)

        for path in file_chain:
            data = _deep_merge(data, _load_yaml(path))

        data = _deep_merge(data, self._env_overrides())
        if cli_overrides:
            data = _deep_merge(data, cli_overrides)

        try:
            return Settings.from_dict(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc

    def _env_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        prefix = f"{self.env_prefix}_"
        for key, raw_value in os.environ.items():
            if not key.startswith(prefix):
                continue
            path_segments = self._normalize_env_key(key[len(prefix) :])
            if len(path_segments) < 2:
                continue
            _set_nested(overrides, path_segments, _parse_scalar(raw_value))
        return overrides

    def _normalize_env_key(self, key: str) -> list[str]:
        # PMON_REFRESH__INTERVAL_SECONDS and PMON_REFRESH_INTERVAL_SECONDS both
        # map to refresh.interval_seconds.
        if "__" in key:
            segments = key.split("__")
        else:
            segments = key.split("_", 1)
        return [segment.lower() for segment in segments if segment]


config_service = ConfigService()

