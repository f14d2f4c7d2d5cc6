from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .errors import ConfigError

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """
    Runtime knobs for the outer surfaces (CLI, chat session, Streamlit page).

    simulated_latency_ms: artificial wait before a chat answer is appended (0 = off)
    preview_rows: number of records shown in a data preview
    log_level: root logging level used by the CLI
    """
    simulated_latency_ms: int = Field(default=0, ge=0)
    preview_rows: int = Field(default=100, ge=1)
    log_level: str = "WARNING"


def _env_int(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from SHEET_ANALYST_* environment variables.

    Unset or empty variables fall back to defaults; malformed values raise
    ConfigError instead of being silently ignored.
    """

    env = os.environ if environ is None else environ

    level = (env.get("SHEET_ANALYST_LOG_LEVEL") or "WARNING").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"SHEET_ANALYST_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {level!r}")

    return Settings(
        simulated_latency_ms=_env_int(env, "SHEET_ANALYST_LATENCY_MS", 0, minimum=0),
        preview_rows=_env_int(env, "SHEET_ANALYST_PREVIEW_ROWS", 100, minimum=1),
        log_level=level,
    )
