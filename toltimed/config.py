"""
Centralized configuration with environment variable overrides.

Program defaults, submission policy, and display settings for the
booking wizard live here. Nothing is hardcoded in wizard or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from toltimed.logging_context import BookingIdFilter

load_dotenv()

logger = logging.getLogger(__name__)


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
class WizardConfig:
    """Booking wizard defaults and submission policy."""

    default_total_days: int = _safe_int("DEFAULT_TOTAL_DAYS", "1")
    submission_timeout_sec: float = _safe_float("SUBMISSION_TIMEOUT_SEC", "30.0")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "₦")


@dataclass(frozen=True)
class CatalogConfig:
    """Catalog display settings."""

    platform_name: str = os.getenv("PLATFORM_NAME", "Toltimed")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    wizard: WizardConfig = field(default_factory=WizardConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "toltimed-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.wizard.default_total_days < 1:
        raise ValueError(
            f"DEFAULT_TOTAL_DAYS must be >= 1, got {config.wizard.default_total_days}"
        )
    if config.wizard.submission_timeout_sec <= 0:
        raise ValueError(
            "SUBMISSION_TIMEOUT_SEC must be > 0, "
            f"got {config.wizard.submission_timeout_sec}"
        )
    if not config.wizard.currency_symbol:
        raise ValueError("CURRENCY_SYMBOL must not be empty")


LOG_FORMAT = "%(asctime)s [%(name)s] [%(booking_id)s] %(levelname)s: %(message)s"


def _log_handler() -> logging.Handler:
    """Console handler that stamps every record, not just booking loggers."""
    handler = logging.StreamHandler()
    handler.addFilter(BookingIdFilter())
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.catalog.platform_name)
    return config


# Singleton instance
settings = load_config()
