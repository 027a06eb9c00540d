# spielplan_api/config.py
from __future__ import annotations

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Proxy source config
# -------------------------
# Origin of the site that exposes /proxy?url=... (the block fetched through it)
PROXY_ORIGIN: str = _get_env("PROXY_ORIGIN", "http://localhost:8080")

SOURCE_TIMEOUT_SECONDS: int = _get_env_int("SOURCE_TIMEOUT_SECONDS", 12)

# Cache TTLs
SOURCE_CACHE_TTL_SECONDS: int = _get_env_int("SOURCE_CACHE_TTL_SECONDS", 300)
SOURCE_STALE_TTL_SECONDS: int = _get_env_int("SOURCE_STALE_TTL_SECONDS", 24 * 3600)


# -------------------------
# Rendering
# -------------------------
# Match dates carrying an offset are shown in this zone
DISPLAY_TIMEZONE: str = _get_env("DISPLAY_TIMEZONE", "Europe/Berlin")

LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    if not PROXY_ORIGIN.startswith("http"):
        raise RuntimeError("PROXY_ORIGIN must start with http/https")

    if SOURCE_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("SOURCE_TIMEOUT_SECONDS must be positive")

    # TTL validation
    if SOURCE_CACHE_TTL_SECONDS <= 0:
        raise RuntimeError("SOURCE_CACHE_TTL_SECONDS must be positive")

    if SOURCE_STALE_TTL_SECONDS < SOURCE_CACHE_TTL_SECONDS:
        raise RuntimeError("SOURCE_STALE_TTL_SECONDS must not be shorter than SOURCE_CACHE_TTL_SECONDS")

    try:
        ZoneInfo(DISPLAY_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(f"DISPLAY_TIMEZONE is not a known IANA zone: {DISPLAY_TIMEZONE}") from e

    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"LOG_LEVEL must be a standard logging level, got {LOG_LEVEL}")
