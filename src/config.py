"""
Centralized configuration with environment variable overrides.

Lab-specific values, refresh cadence, and snapshot locations are
configurable here. Nothing is hardcoded in the availability engine.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class LabConfig:
    """Laboratory identity shown on the status board."""

    name: str = os.getenv("LAB_NAME", "Research Laboratory")
    timezone_label: str = os.getenv("LAB_TIMEZONE_LABEL", "local time")


@dataclass(frozen=True)
class AvailabilityConfig:
    """Rules applied when resolving and aggregating reservations."""

    midnight_end_time: str = os.getenv("MIDNIGHT_END_TIME", "00:00")
    end_of_day_time: str = os.getenv("END_OF_DAY_TIME", "23:59")
    # 0 shows every upcoming reservation
    upcoming_preview_limit: int = _safe_int("UPCOMING_PREVIEW_LIMIT", "5")


@dataclass(frozen=True)
class RefreshConfig:
    """Polling cadence and snapshot source for the dashboard."""

    poll_interval_seconds: float = _safe_float("POLL_INTERVAL_SECONDS", "60.0")
    snapshot_path: str = os.getenv("SNAPSHOT_PATH", "data/snapshot.json")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    lab: LabConfig = field(default_factory=LabConfig)
    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    for var_name, value in [
        ("MIDNIGHT_END_TIME", config.availability.midnight_end_time),
        ("END_OF_DAY_TIME", config.availability.end_of_day_time),
    ]:
        if not _TIME_PATTERN.match(value):
            raise ValueError(f"{var_name} must be an HH:MM time, got {value!r}")

    if config.availability.upcoming_preview_limit < 0:
        raise ValueError(
            "UPCOMING_PREVIEW_LIMIT must be >= 0, "
            f"got {config.availability.upcoming_preview_limit}"
        )
    if config.refresh.poll_interval_seconds <= 0:
        raise ValueError(
            "POLL_INTERVAL_SECONDS must be > 0, "
            f"got {config.refresh.poll_interval_seconds}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.lab.name)
    return config


# Singleton instance
settings = load_config()
