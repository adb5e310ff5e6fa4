from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from sipcalc.core.goal import DEFAULT_MAX_YEARS

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


@dataclass(frozen=True)
class Settings:
    env: str = "dev"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    goal_max_years: int = DEFAULT_MAX_YEARS
    port: int = 5000


def _env(key: str, default: str) -> str:
    # empty values count as unset
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_int(key: str, default: int) -> int:
    raw = _env(key, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build settings from environment variables, after loading a ``.env`` file
    if one exists. Variables already set in the environment win over ``.env``.
    """
    load_dotenv(dotenv_path)

    origins = [origin.strip() for origin in _env("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")]

    goal_max_years = _env_int("GOAL_MAX_YEARS", DEFAULT_MAX_YEARS)
    if goal_max_years < 1:
        raise ValueError(f"GOAL_MAX_YEARS must be at least 1, got {goal_max_years}")

    return Settings(
        env=_env("SIPCALC_ENV", "dev"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        cors_origins=[origin for origin in origins if origin],
        goal_max_years=goal_max_years,
        port=_env_int("PORT", 5000),
    )
