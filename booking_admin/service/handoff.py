"""
Payload served to the booking widget / reservation engine for one service.

The engine matches customer requests against ``slots`` and enforces the
resolved policy; this module only assembles what it reads.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from booking_admin.config import settings
from booking_admin.schemas.customer_schema import CustomerField
from booking_admin.schemas.policy_schema import ResolvedBookingPolicy
from booking_admin.schemas.service_schema import Service, ShopSettings
from booking_admin.service.booking_policy import resolve_booking_policy
from booking_admin.slots.slot_builder import to_canonical_form
from booking_admin.utils import normalize_email, split_emails

logger = logging.getLogger(__name__)


class BookingEnginePayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service_id: Optional[int] = None
    name: str
    category: Optional[str] = None
    timezone: Optional[str] = None
    service_type: Optional[str] = None
    duration: int
    duration_unit: str
    slot_record_id: Optional[int] = None
    slots: Optional[dict[str, Any]] = None
    policy: ResolvedBookingPolicy
    customer_fields: list[CustomerField] = Field(default_factory=list)
    location_type: Optional[str] = None
    location_ids: list[int] = Field(default_factory=list)
    staff_ids: list[int] = Field(default_factory=list)
    hide_location_selection: bool = False
    hide_staff_selection: bool = False
    product_id: Optional[str] = None
    variant_ids: list[str] = Field(default_factory=list)
    slot_reservation_minutes: int
    refund_on_cancel: bool = False
    notify: list[str] = Field(default_factory=list)


def notification_recipients(shop_settings: Optional[ShopSettings], service: Service) -> list[str]:
    """Who should hear about bookings on ``service``: shop admin, extra
    addresses, then the service's own notification email. De-duplicated."""
    candidates: list[str] = []
    if shop_settings is not None:
        if shop_settings.admin_email:
            candidates.append(shop_settings.admin_email)
        candidates.extend(split_emails(shop_settings.additional_emails))
    if service.notification_email:
        candidates.append(service.notification_email)

    recipients: list[str] = []
    for email in candidates:
        normalized = normalize_email(email)
        if normalized and normalized not in recipients:
            recipients.append(normalized)
    return recipients


def build_engine_payload(
    service: Service,
    slot_record_id: Optional[int] = None,
    shop_settings: Optional[ShopSettings] = None,
) -> BookingEnginePayload:
    """Assemble the hand-off for one service. The policy is recomputed on every call."""
    slots = None
    if service.slot_configuration is not None:
        slots = to_canonical_form(service.slot_configuration, service.service_type)

    reservation_minutes = settings.policy.slot_reservation_minutes
    if shop_settings is not None and shop_settings.slot_reservation_minutes:
        reservation_minutes = shop_settings.slot_reservation_minutes

    payload = BookingEnginePayload(
        service_id=service.id,
        name=service.name,
        category=service.category,
        timezone=service.timezone,
        service_type=service.service_type.value if service.service_type else None,
        duration=service.duration,
        duration_unit=service.duration_unit,
        slot_record_id=slot_record_id,
        slots=slots,
        policy=resolve_booking_policy(service),
        customer_fields=list(service.customer_fields),
        location_type=service.location_type.value if service.location_type else None,
        location_ids=list(service.location_ids),
        staff_ids=list(service.staff_ids),
        hide_location_selection=service.hide_location_selection,
        hide_staff_selection=service.hide_staff_selection,
        product_id=service.product.product_id if service.product else None,
        variant_ids=list(service.product.variant_ids) if service.product else [],
        slot_reservation_minutes=reservation_minutes,
        refund_on_cancel=bool(shop_settings and shop_settings.refund_on_booking_cancel),
        notify=notification_recipients(shop_settings, service),
    )
    logger.debug("Built engine payload for service %s", service.id)
    return payload
