"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      : committed static defaults
  2. ``config/local.toml``        : optional local overrides (gitignored)
  3. ``.env``                     : local secrets and env overrides (gitignored)
  4. Environment variables        : ``WEEKLY_FORECASTER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

This is the configuration of the *application* (logging, caching, which
weeks to force to actual). The per-product forecast assumptions are a
``ProjectionConfig`` supplied by the caller, never read from here.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Projection engine settings."""

    model_config = ConfigDict(frozen=True)

    default_horizon_weeks: int = 12
    cache_projections: bool = True
    cache_max_entries: int = 128

    @field_validator("default_horizon_weeks")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"default_horizon_weeks must be positive, got {v}.")
        return v

    @field_validator("cache_max_entries")
    @classmethod
    def validate_cache_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"cache_max_entries must be >= 1, got {v}.")
        return v


class ReconciliationConfig(BaseModel):
    """Reconciliation defaults.

    ``forced_actual_weeks`` lists weeks treated as actual even before a
    record exists (their effective values mirror the projection). This is the
    only sanctioned source of "default actual" behaviour; no figures are
    embedded in code.
    """

    model_config = ConfigDict(frozen=True)

    forced_actual_weeks: list[int] = []

    @field_validator("forced_actual_weeks")
    @classmethod
    def validate_weeks(cls, v: list[int]) -> list[int]:
        bad = [w for w in v if w < 1]
        if bad:
            raise ValueError(f"forced_actual_weeks must be >= 1, got {bad}.")
        return sorted(set(v))


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
    """Complete application configuration; the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    reconciliation: ReconciliationConfig = ReconciliationConfig()
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
            ``<project_root>/config/default.toml``.

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
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply WEEKLY_FORECASTER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


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
    """Apply WEEKLY_FORECASTER_* env vars to the raw config dict.

    Supported overrides:
      WEEKLY_FORECASTER_LOG_LEVEL       → raw["logging"]["level"]
      WEEKLY_FORECASTER_FORCED_WEEKS    → raw["reconciliation"]["forced_actual_weeks"]
                                          (comma-separated, e.g. "1,2")
      WEEKLY_FORECASTER_DEBUG           → raw["debug"]
    """
    if log_level := os.environ.get("WEEKLY_FORECASTER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if forced := os.environ.get("WEEKLY_FORECASTER_FORCED_WEEKS"):
        raw.setdefault("reconciliation", {})["forced_actual_weeks"] = [
            int(w) for w in forced.split(",") if w.strip()
        ]

    if debug := os.environ.get("WEEKLY_FORECASTER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        reconciliation=ReconciliationConfig(**raw.get("reconciliation", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
