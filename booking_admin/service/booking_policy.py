"""
Booking policy resolver.

Combines a service's independently edited policy fields into one
ResolvedBookingPolicy for the review screen and the booking engine.
Pure computation: every input has a defined default, so nothing here
raises for missing values.
"""

import logging
from typing import Optional

from booking_admin.config import settings
from booking_admin.schemas.policy_schema import (
    BookNowPayLater,
    BundleBookingPolicy,
    BundleSummary,
    CancellationPolicy,
    CancellationSummary,
    CapacityPolicy,
    CutoffUnit,
    FullPayment,
    ReschedulePolicy,
    RescheduleSummary,
    ResolvedBookingPolicy,
)
from booking_admin.schemas.service_schema import Service
from booking_admin.schemas.slot_schema import ServiceType

logger = logging.getLogger(__name__)

NOT_ALLOWED = "Not allowed"

_UNIT_MINUTES = {"minutes": 1, "hours": 60, "days": 24 * 60}
_CUTOFF_ABBREVIATIONS = {CutoffUnit.HOURS: "h", CutoffUnit.DAYS: "d"}
_CUTOFF_HOURS = {CutoffUnit.HOURS: 1, CutoffUnit.DAYS: 24}

PAYMENT_LABELS = {
    "fullPayment": "Full Payment",
    "bookNowPayLater": "Book Now, Pay Later",
}
DEFAULT_PAYMENT_KIND = "bookNowPayLater"


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def resolve_lead_time(notice: Optional[int], unit: Optional[str]) -> str:
    """'No lead time' for zero notice, otherwise e.g. '2 hours'."""
    notice = notice or 0
    unit = unit or settings.policy.lead_time_unit
    if notice == 0:
        return "No lead time"
    return f"{notice} {unit.lower()}"


def lead_time_minutes(notice: Optional[int], unit: Optional[str]) -> int:
    """Lead time as minutes for the booking engine. Unknown units count as minutes."""
    unit = (unit or settings.policy.lead_time_unit).lower()
    return (notice or 0) * _UNIT_MINUTES.get(unit, 1)


def resolve_visibility_window(days: Optional[int]) -> str:
    return f"{days or settings.policy.visibility_days} days ahead"


def resolve_cancellation(policy: Optional[CancellationPolicy]) -> CancellationSummary:
    """
    Cancellation label, e.g. 'Allowed (2d cutoff)'.

    Cutoff falls back to the configured default in hours. Days are
    abbreviated 'd', hours 'h'.
    """
    if policy is None or not policy.allowed:
        return CancellationSummary(allowed=False, label=NOT_ALLOWED)

    if policy.cutoff_value:
        value = policy.cutoff_value
        unit = policy.cutoff_unit or CutoffUnit.HOURS
    else:
        value = settings.policy.cancel_cutoff_value
        unit = CutoffUnit.HOURS

    label = f"Allowed ({_format_number(value)}{_CUTOFF_ABBREVIATIONS[unit]} cutoff)"
    return CancellationSummary(
        allowed=True, label=label, cutoff_hours=value * _CUTOFF_HOURS[unit],
    )


def resolve_reschedule(policy: Optional[ReschedulePolicy]) -> RescheduleSummary:
    if policy is None or not policy.allowed:
        return RescheduleSummary(allowed=False, label=NOT_ALLOWED)
    cutoff = policy.cutoff_hours
    if cutoff is None:
        cutoff = settings.policy.reschedule_cutoff_hours
    return RescheduleSummary(allowed=True, label=f"Allowed ({cutoff}h cutoff)", cutoff_hours=cutoff)


def payment_kind(pref) -> str:
    if isinstance(pref, (FullPayment, BookNowPayLater)):
        return pref.kind
    return DEFAULT_PAYMENT_KIND


def resolve_payment(pref) -> str:
    """Display label for a payment preference; absent means Book Now, Pay Later."""
    return PAYMENT_LABELS[payment_kind(pref)]


def resolve_capacity(policy: Optional[CapacityPolicy]) -> str:
    if policy is None or policy.max_concurrent_bookings_per_slot is None:
        return "Unlimited"
    return f"{policy.max_concurrent_bookings_per_slot} bookings per slot"


def resolve_bundle(policy: Optional[BundleBookingPolicy], service_type) -> BundleSummary:
    """Bundle limits; only regular services honour bundle booking."""
    if policy is None or not policy.enabled or service_type != ServiceType.REGULAR:
        return BundleSummary(enabled=False)
    return BundleSummary(enabled=True, min_slots=policy.min_slots, max_slots=policy.max_slots)


def resolve_booking_policy(service: Service) -> ResolvedBookingPolicy:
    """Recompute the full policy snapshot for a service."""
    visibility_days = service.visibility_days or settings.policy.visibility_days
    resolved = ResolvedBookingPolicy(
        lead_time_label=resolve_lead_time(service.lead_time.notice, service.lead_time.unit),
        lead_time_minutes=lead_time_minutes(service.lead_time.notice, service.lead_time.unit),
        visibility_days=visibility_days,
        visibility_label=resolve_visibility_window(visibility_days),
        cancellation=resolve_cancellation(service.cancellation),
        reschedule=resolve_reschedule(service.reschedule),
        capacity_per_slot=service.capacity.max_concurrent_bookings_per_slot,
        capacity_label=resolve_capacity(service.capacity),
        bundle=resolve_bundle(service.bundle, service.service_type),
        max_quantity_per_booking=(
            service.max_product_quantities or settings.policy.max_product_quantities
        ),
        payment_kind=payment_kind(service.payment),
        payment_label=resolve_payment(service.payment),
    )
    logger.debug("Resolved booking policy for service %s", service.id)
    return resolved
