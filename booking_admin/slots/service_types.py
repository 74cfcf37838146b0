"""
Per-service-type slot rules: label sets, default slots, and the seed
configuration for a new service.

Pure lookups. Nothing here mutates its input.
"""

import logging
from datetime import datetime, time
from typing import Optional

from booking_admin.config import settings
from booking_admin.errors import UnknownServiceTypeError
from booking_admin.schemas.slot_schema import (
    ALL_DAYS,
    OFF,
    WEEKDAYS,
    DaySlot,
    MultiDayConstraint,
    ServiceType,
    SlotConfiguration,
)

logger = logging.getLogger(__name__)

FULL_DAY_LADDER: tuple[str, ...] = (
    "9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM", "1:00 PM",
    "2:00 PM", "3:00 PM", "4:00 PM", "5:00 PM", "6:00 PM",
)

_FULL_DAY_LABELS = frozenset(FULL_DAY_LADDER) | {OFF}


def coerce_service_type(value) -> ServiceType:
    """Return the ServiceType for ``value`` or fail hard on anything else."""
    try:
        return ServiceType(value)
    except ValueError:
        raise UnknownServiceTypeError(
            f"Unknown service type {value!r}. "
            f"Expected one of {[t.value for t in ServiceType]}"
        ) from None


def valid_labels(service_type) -> Optional[frozenset[str]]:
    """Allowed time labels, or None when any 24-hour ``HH:MM`` value is allowed."""
    service_type = coerce_service_type(service_type)
    if service_type == ServiceType.FULL_DAY:
        return _FULL_DAY_LABELS
    return None


def parse_time_of_day(value: str) -> Optional[time]:
    """Parse ``HH:MM`` or a ladder label like ``9:00 AM``. Returns None if neither."""
    value = value.strip()
    for fmt in ("%H:%M", "%I:%M %p"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return None


def is_valid_label(service_type, value: str) -> bool:
    labels = valid_labels(service_type)
    if labels is not None:
        return value in labels
    try:
        datetime.strptime(value.strip(), "%H:%M")
        return True
    except ValueError:
        return False


def default_slot(service_type) -> DaySlot:
    """The slot a day falls back to when opened or reset."""
    service_type = coerce_service_type(service_type)
    if service_type == ServiceType.FULL_DAY:
        return DaySlot(start=settings.slots.full_day_start, end=settings.slots.full_day_end)
    return DaySlot(start=settings.slots.regular_start, end=settings.slots.regular_end)


def closed_day(service_type) -> list[DaySlot]:
    """How a closed day is written for this type."""
    service_type = coerce_service_type(service_type)
    if service_type == ServiceType.FULL_DAY:
        return [DaySlot(start=OFF, end=OFF)]
    return []


def default_configuration(service_type) -> SlotConfiguration:
    """
    Seed configuration for a new service.

    regular:   Mon-Fri one default window, weekend closed
    full-day:  Mon-Fri one all-day slot, weekend Off
    multi-day: empty grid, bookable on weekdays by default
    """
    service_type = coerce_service_type(service_type)

    if service_type == ServiceType.MULTI_DAY:
        return SlotConfiguration(
            service_type=service_type,
            days={day: [] for day in ALL_DAYS},
            multi_day=MultiDayConstraint(),
        )

    days = {
        day: [default_slot(service_type)] if day in WEEKDAYS else closed_day(service_type)
        for day in ALL_DAYS
    }
    return SlotConfiguration(service_type=service_type, days=days)
