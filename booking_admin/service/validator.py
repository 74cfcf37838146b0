"""
Cross-field validation for service configurations.

A reporting layer: every check returns a list of human-readable messages
(empty list = valid) and never mutates or rejects the record itself.
The UI decides whether to block a save.
"""

import logging

from booking_admin.config import LEAD_TIME_UNITS
from booking_admin.schemas.policy_schema import BookNowPayLater, FullPayment
from booking_admin.schemas.service_schema import LocationType, Service
from booking_admin.schemas.slot_schema import (
    ALL_DAYS,
    ServiceType,
    SlotConfiguration,
)
from booking_admin.slots.service_types import (
    is_valid_label,
    parse_time_of_day,
)
from booking_admin.slots.slot_builder import windows_differ

logger = logging.getLogger(__name__)

WIZARD_STEPS = (0, 1, 2, 3)


def has_slots(config) -> bool:
    """True when the configuration offers something bookable."""
    if config is None:
        return False
    if config.service_type == ServiceType.MULTI_DAY:
        return bool(config.multi_day and config.multi_day.allowed_weekdays)
    return bool(config.open_days())


def _validate_multi_day(config: SlotConfiguration) -> list[str]:
    constraint = config.multi_day
    if constraint is None:
        return ["Multi-day services need minimum and maximum days."]

    errors = []
    if constraint.min_days < 1:
        errors.append("Minimum days must be at least 1.")
    if constraint.max_days < constraint.min_days:
        errors.append(
            f"Maximum days ({constraint.max_days}) must be greater than or equal to "
            f"minimum days ({constraint.min_days})."
        )
    if not constraint.allowed_weekdays:
        errors.append("Select at least one weekday customers can book.")
    return errors


def validate_slot_configuration(config: SlotConfiguration) -> list[str]:
    """Label, ordering, and overlap checks the slot builder deliberately skips."""
    errors: list[str] = []
    service_type = config.service_type

    for day in ALL_DAYS:
        day_name = day.value.capitalize()
        timed = []
        for index, slot in enumerate(config.days[day], start=1):
            if slot.is_off():
                continue
            bad = [v for v in (slot.start, slot.end) if not is_valid_label(service_type, v)]
            if bad:
                errors.append(f"{day_name} slot {index}: invalid time {bad[0]!r}.")
                continue
            start, end = parse_time_of_day(slot.start), parse_time_of_day(slot.end)
            if start is None or end is None:
                errors.append(f"{day_name} slot {index}: cannot mix Off with a time.")
                continue
            if start >= end:
                errors.append(f"{day_name} slot {index}: end time must be after start time.")
                continue
            timed.append((start, end, index))

        timed.sort()
        for (_, prev_end, prev_index), (start, _, index) in zip(timed, timed[1:]):
            if start < prev_end:
                errors.append(f"{day_name} slots {prev_index} and {index} overlap.")

    if service_type == ServiceType.REGULAR and windows_differ(config):
        errors.append("Regular slot windows differ across open days; every open day must share them.")
    if service_type == ServiceType.MULTI_DAY:
        errors.extend(_validate_multi_day(config))
    return errors


def _validate_bundle_capacity(service: Service) -> list[str]:
    errors: list[str] = []
    bundle = service.bundle
    if bundle and bundle.enabled:
        if service.service_type != ServiceType.REGULAR:
            errors.append("Bundle booking is only available for regular services.")
        if bundle.min_slots is not None and bundle.min_slots < 1:
            errors.append("Minimum slots to book must be at least 1.")
        if (
            bundle.min_slots is not None
            and bundle.max_slots is not None
            and bundle.max_slots < bundle.min_slots
        ):
            errors.append(
                f"Maximum slots per booking ({bundle.max_slots}) must be greater than or "
                f"equal to minimum slots ({bundle.min_slots})."
            )

    capacity = service.capacity.max_concurrent_bookings_per_slot
    if capacity is not None and capacity < 1:
        errors.append("Capacity must be at least 1 booking per slot.")
    return errors


def _validate_duration(service: Service) -> list[str]:
    errors: list[str] = []
    if service.duration < 1:
        errors.append("Duration must be at least 1.")
    if service.duration_unit not in LEAD_TIME_UNITS:
        errors.append(f"Duration unit must be one of {', '.join(LEAD_TIME_UNITS)}.")
    return errors


def _validate_booking_rules(service: Service) -> list[str]:
    errors: list[str] = []
    cancellation = service.cancellation
    if cancellation.allowed and cancellation.cutoff_value is not None and cancellation.cutoff_value <= 0:
        errors.append("Cancellation cut-off must be a positive number.")

    if service.lead_time.notice < 0:
        errors.append("Lead time cannot be negative.")
    if service.lead_time.unit not in LEAD_TIME_UNITS:
        errors.append(f"Lead time unit must be one of {', '.join(LEAD_TIME_UNITS)}.")
    if service.visibility_days is not None and service.visibility_days < 1:
        errors.append("Visibility window must be at least 1 day.")
    if service.max_product_quantities is not None and service.max_product_quantities < 1:
        errors.append("Maximum product quantity must be at least 1.")
    return errors


def validate_policies(service: Service) -> list[str]:
    """Numeric range checks on duration, bundle, capacity, cancellation, and lead time."""
    return (
        _validate_duration(service)
        + _validate_bundle_capacity(service)
        + _validate_booking_rules(service)
    )


def _validate_product_slot_step(service: Service) -> list[str]:
    errors = []
    if not service.name.strip():
        errors.append("Service name is required.")
    if service.product is None or not service.product.product_id:
        errors.append("Select a product to link to this service.")
    if service.service_type is None:
        errors.append("Choose a service type.")
    if not has_slots(service.slot_configuration):
        errors.append("Add at least one bookable slot.")
    elif service.slot_configuration.service_type != service.service_type:
        errors.append("Slot configuration does not match the service type.")
    else:
        errors.extend(validate_slot_configuration(service.slot_configuration))

    errors.extend(_validate_duration(service))
    errors.extend(_validate_bundle_capacity(service))
    return errors


def _validate_location_staff_step(service: Service) -> list[str]:
    if service.location_type not in (LocationType.ONLINE, LocationType.OFFLINE):
        return ["Choose whether the service is online or offline."]
    return []


def _validate_others_step(service: Service) -> list[str]:
    errors = []
    if not isinstance(service.payment, (FullPayment, BookNowPayLater)):
        errors.append("Choose a payment preference.")
    errors.extend(_validate_booking_rules(service))
    return errors


def validate_step(service: Service, step: int) -> list[str]:
    """Violations blocking the creation wizard from leaving ``step``."""
    if step not in WIZARD_STEPS:
        raise ValueError(f"Unknown wizard step: {step}. Expected one of {list(WIZARD_STEPS)}")

    if step == 0:
        errors = _validate_product_slot_step(service)
    elif step == 1:
        errors = _validate_location_staff_step(service)
    elif step == 2:
        errors = _validate_others_step(service)
    else:
        errors = []

    if errors:
        logger.debug("Step %d has %d violation(s)", step, len(errors))
    return errors


def validate_for_save(service: Service) -> list[str]:
    """Edit-mode gate: only the service name is mandatory."""
    if not service.name or not service.name.strip():
        return ["Service name is required."]
    return []
