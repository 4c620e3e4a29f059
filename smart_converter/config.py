# Role: Central configuration module. Loads .env into environment variables and computes runtime flags (DEBUG).
# Importers read smart_converter.config.DEBUG to control tracing without threading flags through every call.

from __future__ import annotations

import os
from dotenv import load_dotenv

DEBUG: bool = False

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"
DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4/latest"


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def gemini_model() -> str:
    return os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL


def rates_api_url() -> str:
    return (os.getenv("RATES_API_URL") or DEFAULT_RATES_API_URL).rstrip("/")


def rate_cache_ttl_minutes() -> int:
    return _int_env("RATE_CACHE_TTL_MINUTES", 10)


def history_max_exchanges() -> int:
    # One exchange = user query + model answer (two history entries).
    return _int_env("HISTORY_MAX_EXCHANGES", 5)
