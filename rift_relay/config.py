"""
Centralized Configuration Management

Loads configuration from environment variables with sensible defaults.
Only the poll intervals (and the live request timeout) are tunable; respawn
durations, the gold sample period, the reconnect backoff and the overlay
event-buffer size are fixed constants in their modules.
"""

import os
from dataclasses import dataclass
from typing import Optional
from enum import Enum
from functools import lru_cache

from .exceptions import ConfigurationError


class Environment(Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_LIVE_CLIENT_URL = "https://127.0.0.1:2999/liveclientdata"


@dataclass(frozen=True)
class LiveClientConfig:
    """Live Client Data API poller configuration"""
    base_url: str = DEFAULT_LIVE_CLIENT_URL
    poll_interval_ms: int = 500
    request_timeout_ms: int = 3000


@dataclass(frozen=True)
class LCUConfig:
    """League Client (pick/ban) poller configuration"""
    poll_interval_ms: int = 1000


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    json_format: bool = False
    log_file: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration"""
    env: Environment
    live: LiveClientConfig
    lcu: LCUConfig
    logging: LoggingConfig
    debug: bool = False


def _get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get environment variable with optional requirement check"""
    value = os.getenv(key, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {key} is not set")
    return value


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable"""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer environment variable"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Load and cache application configuration.

    Uses @lru_cache to ensure config is loaded once and reused.
    Call get_config.cache_clear() to reload configuration.
    """
    env_str = _get_env("APP_ENV", "development")
    try:
        env = Environment(env_str.lower())
    except ValueError:
        env = Environment.DEVELOPMENT

    is_prod = env == Environment.PRODUCTION

    return AppConfig(
        env=env,
        debug=_get_env_bool("DEBUG", default=not is_prod),
        live=LiveClientConfig(
            base_url=_get_env("LIVE_CLIENT_URL", DEFAULT_LIVE_CLIENT_URL).rstrip("/"),
            poll_interval_ms=_get_env_int("LIVE_POLL_INTERVAL_MS", 500),
            request_timeout_ms=_get_env_int("LIVE_REQUEST_TIMEOUT_MS", 3000),
        ),
        lcu=LCUConfig(
            poll_interval_ms=_get_env_int("LCU_POLL_INTERVAL_MS", 1000),
        ),
        logging=LoggingConfig(
            level=_get_env("LOG_LEVEL", "DEBUG" if not is_prod else "INFO"),
            json_format=is_prod,
            log_file=_get_env("LOG_FILE"),
        ),
    )


def validate_config() -> bool:
    """
    Validate configuration on startup.

    Returns True if valid, raises ConfigurationError if not.
    """
    try:
        config = get_config()

        intervals = {
            "LIVE_POLL_INTERVAL_MS": config.live.poll_interval_ms,
            "LIVE_REQUEST_TIMEOUT_MS": config.live.request_timeout_ms,
            "LCU_POLL_INTERVAL_MS": config.lcu.poll_interval_ms,
        }
        for key, value in intervals.items():
            if value <= 0:
                raise ConfigurationError(f"{key} must be a positive number of milliseconds, got {value}")

        if not config.live.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"LIVE_CLIENT_URL must be an http(s) URL, got '{config.live.base_url}'"
            )

        return True

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Configuration validation failed: {e}")
