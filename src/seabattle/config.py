"""Runtime settings for the targeting AI."""

from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import BaseModel, field_validator

DEFAULT_SHIP_LENGTHS: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)


class AiConfig(BaseModel):
    """Seed and log level, read from ``SEABATTLE_*`` variables and CLI flags."""

    seed: int | None = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> "AiConfig":
        """Environment first, then non-None ``overrides`` (CLI flags) on top."""
        data: dict[str, Any] = {}
        seed = os.getenv("SEABATTLE_SEED")
        if seed is not None and seed.strip():
            data["seed"] = seed.strip()
        level = os.getenv("SEABATTLE_LOG_LEVEL")
        if level:
            data["log_level"] = level
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
