"""
Configuration settings for the tariff cost dashboard.
"""
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class Config:
    """Main configuration class containing dashboard settings."""

    # Server
    HOST = os.getenv("DASHBOARD_HOST", "127.0.0.1")
    PORT = _env_int("DASHBOARD_PORT", 8050)
    DEBUG = _env_bool("DASHBOARD_DEBUG")

    # Controls
    DEFAULT_TARIFF_PCT = _env_int("DASHBOARD_DEFAULT_TARIFF", 0)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
