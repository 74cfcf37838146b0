"""
Centralized configuration with environment variable overrides.

Default slot windows, policy defaults, and logging settings live here.
Nothing in the slot builder or policy resolver hardcodes these values.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from booking_admin.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

LEAD_TIME_UNITS = ("Minutes", "Hours", "Days")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SlotDefaults:
    """Time windows used to seed new slot configurations."""

    regular_start: str = os.getenv("DEFAULT_REGULAR_START", "09:00")
    regular_end: str = os.getenv("DEFAULT_REGULAR_END", "17:00")
    full_day_start: str = os.getenv("DEFAULT_FULL_DAY_START", "9:00 AM")
    full_day_end: str = os.getenv("DEFAULT_FULL_DAY_END", "6:00 PM")


@dataclass(frozen=True)
class PolicyDefaults:
    """Fallbacks applied when a service leaves a policy field unset."""

    visibility_days: int = _safe_int("DEFAULT_VISIBILITY_DAYS", "60")
    reschedule_cutoff_hours: int = _safe_int("DEFAULT_RESCHEDULE_CUTOFF_HOURS", "24")
    cancel_cutoff_value: int = _safe_int("DEFAULT_CANCEL_CUTOFF", "24")
    lead_time_unit: str = os.getenv("DEFAULT_LEAD_TIME_UNIT", "Minutes")
    max_product_quantities: int = _safe_int("DEFAULT_MAX_PRODUCT_QUANTITIES", "5")
    slot_reservation_minutes: int = _safe_int("SLOT_RESERVATION_MINUTES", "5")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    slots: SlotDefaults = field(default_factory=SlotDefaults)
    policy: PolicyDefaults = field(default_factory=PolicyDefaults)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "booking-admin")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.policy.visibility_days < 1:
        raise ValueError(
            f"DEFAULT_VISIBILITY_DAYS must be >= 1, got {config.policy.visibility_days}"
        )
    if config.policy.reschedule_cutoff_hours < 0:
        raise ValueError(
            "DEFAULT_RESCHEDULE_CUTOFF_HOURS must be >= 0, "
            f"got {config.policy.reschedule_cutoff_hours}"
        )
    if config.policy.cancel_cutoff_value < 1:
        raise ValueError(
            f"DEFAULT_CANCEL_CUTOFF must be >= 1, got {config.policy.cancel_cutoff_value}"
        )
    if config.policy.lead_time_unit not in LEAD_TIME_UNITS:
        raise ValueError(
            f"DEFAULT_LEAD_TIME_UNIT must be one of {list(LEAD_TIME_UNITS)}, "
            f"got {config.policy.lead_time_unit!r}"
        )
    if config.policy.max_product_quantities < 1:
        raise ValueError(
            "DEFAULT_MAX_PRODUCT_QUANTITIES must be >= 1, "
            f"got {config.policy.max_product_quantities}"
        )
    if config.policy.slot_reservation_minutes < 1:
        raise ValueError(
            "SLOT_RESERVATION_MINUTES must be >= 1, "
            f"got {config.policy.slot_reservation_minutes}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Module loggers without the filter still need request_id for the format
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
