# Role: Central configuration module. Loads .env into environment variables and computes runtime flags
# (DEBUG, log level). Importers read travelai.config.DEBUG to control verbose tracing without threading
# flags through every call.

from __future__ import annotations

import logging
import os
from typing import List

from dotenv import load_dotenv

DEBUG: bool = False
LOG_LEVEL: str = "INFO"

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 60.0

_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG / LOG_LEVEL and configure logging.
    This makes the flags correct even if load_env() is called after import.
    """
    global DEBUG, LOG_LEVEL
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    configure_logging(LOG_LEVEL)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("travelai")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
    root.propagate = False


def gemini_model() -> str:
    return os.getenv("GEMINI_MODEL", DEFAULT_MODEL)


def gemini_temperature() -> float:
    try:
        return float(os.getenv("GEMINI_TEMPERATURE", DEFAULT_TEMPERATURE))
    except ValueError:
        return DEFAULT_TEMPERATURE


def gemini_timeout_seconds() -> float:
    try:
        return float(os.getenv("GEMINI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def allowed_origins() -> List[str]:
    # Key line: comma-separated list, "*" when unset or blank.
    raw = os.getenv("TRAVELAI_ALLOWED_ORIGINS") or "*"
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]
