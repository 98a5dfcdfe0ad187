from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


DEFAULT_TOTAL_STEPS = 12
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


@dataclass
class Settings:
    allowed_origins: List[str]
    total_steps: int = DEFAULT_TOTAL_STEPS
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Read settings from the environment (and a local .env, if present)."""

    load_dotenv()

    raw_origins = os.environ.get("ALLOWED_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()] or ["*"]

    raw_steps = os.environ.get("ONBOARDING_TOTAL_STEPS", "").strip()
    try:
        total_steps = int(raw_steps) if raw_steps else DEFAULT_TOTAL_STEPS
    except ValueError:
        raise ValueError(f"ONBOARDING_TOTAL_STEPS must be an integer, got {raw_steps!r}") from None
    if total_steps < 0:
        raise ValueError("ONBOARDING_TOTAL_STEPS must not be negative")

    return Settings(
        allowed_origins=origins,
        total_steps=total_steps,
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(level: str = "INFO") -> None:
    logger = logging.getLogger("onboarding_access")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
