"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``PRICE_FORECASTER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Only the CLI reads configuration.  The forecasting, seasonality, demand and
recommendation modules take every tunable as an explicit keyword argument;
the CLI pulls the values out of ``AppConfig`` and passes them down.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ForecastConfig(BaseModel):
    """Price forecast settings."""

    model_config = ConfigDict(frozen=True)

    horizon_days: int = 30
    ema_alpha: float = 0.3
    band_z: float = 1.96    # 95% two-sided band

    @field_validator("horizon_days")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if not 1 <= v <= 365:
            raise ValueError(f"horizon_days must be in [1, 365], got {v}.")
        return v

    @field_validator("ema_alpha")
    @classmethod
    def validate_alpha(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"ema_alpha must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("band_z")
    @classmethod
    def validate_band_z(cls, v: float) -> float:
        if not v > 0:
            raise ValueError(f"band_z must be > 0, got {v}.")
        return v


class FestivalConfig(BaseModel):
    """Festival calendar lookup settings."""

    model_config = ConfigDict(frozen=True)

    lookahead_days: int = 60

    @field_validator("lookahead_days")
    @classmethod
    def validate_lookahead(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"lookahead_days must be >= 1, got {v}.")
        return v


class InventoryConfig(BaseModel):
    """Stock planning defaults."""

    model_config = ConfigDict(frozen=True)

    lead_time_days: int = 7
    safety_stock_days: int = 5

    @field_validator("lead_time_days", "safety_stock_days")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"inventory day counts must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    forecast: ForecastConfig = ForecastConfig()
    festivals: FestivalConfig = FestivalConfig()
    inventory: InventoryConfig = InventoryConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.  When the default file is
            absent the built-in defaults are used; an explicit path must exist.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_path = default_path
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)

    # Also merge local.toml if present (gitignored local overrides)
    if config_path is not None:
        local_config_path = config_path.parent / "local.toml"
        if local_config_path.exists():
            raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply PRICE_FORECASTER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PRICE_FORECASTER_* env vars to the raw config dict.

    Supported overrides:
      PRICE_FORECASTER_LOG_LEVEL     → raw["logging"]["level"]
      PRICE_FORECASTER_HORIZON_DAYS  → raw["forecast"]["horizon_days"]
      PRICE_FORECASTER_DEBUG         → raw["debug"]
    """
    if log_level := os.environ.get("PRICE_FORECASTER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if horizon := os.environ.get("PRICE_FORECASTER_HORIZON_DAYS"):
        raw.setdefault("forecast", {})["horizon_days"] = int(horizon)

    if debug := os.environ.get("PRICE_FORECASTER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        forecast=ForecastConfig(**raw.get("forecast", {})),
        festivals=FestivalConfig(**raw.get("festivals", {})),
        inventory=InventoryConfig(**raw.get("inventory", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
