"""
Service drafts: creation with defaults, service type changes, and the
review-screen projection of an in-progress edit.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from booking_admin.errors import ServiceTypeLockedError
from booking_admin.integrations.catalog import ProductCatalog
from booking_admin.schemas.policy_schema import ResolvedBookingPolicy
from booking_admin.schemas.service_schema import ProductSelection, Service
from booking_admin.schemas.slot_schema import ServiceType
from booking_admin.service.booking_policy import resolve_booking_policy
from booking_admin.service.customer_fields import default_customer_fields
from booking_admin.slots.service_types import coerce_service_type, default_configuration

logger = logging.getLogger(__name__)

SERVICE_TYPE_LABELS = {
    ServiceType.REGULAR: "Regular",
    ServiceType.FULL_DAY: "Full-Day",
    ServiceType.MULTI_DAY: "Multi-Day",
}
STANDALONE_LABEL = "Standalone Service"


def create_service(
    service_type=ServiceType.REGULAR,
    name: str = "",
    product: Optional[ProductSelection] = None,
    **overrides: Any,
) -> Service:
    """A new draft seeded with the type's default slots and the built-in customer fields."""
    service_type = coerce_service_type(service_type)
    data: dict[str, Any] = {
        "name": name,
        "service_type": service_type,
        "product": product,
        "slot_configuration": default_configuration(service_type),
        "customer_fields": default_customer_fields(),
    }
    data.update(overrides)
    return Service(**data)


def change_service_type(service: Service, service_type) -> Service:
    """
    Switch a draft to another service type, reseeding its slots.

    Raises:
        ServiceTypeLockedError: once the service has been persisted.
    """
    service_type = coerce_service_type(service_type)
    if service_type == service.service_type:
        return service
    if service.id is not None:
        raise ServiceTypeLockedError(
            f"Service {service.id} is already saved as {service.service_type.value!r}; "
            "delete and recreate it to change the type."
        )
    logger.debug("Draft service type changed to %s", service_type.value)
    return service.model_copy(update={
        "service_type": service_type,
        "slot_configuration": default_configuration(service_type),
        "bundle": service.bundle if service_type == ServiceType.REGULAR else None,
    })


class DraftProjection(BaseModel):
    """What the review screen shows for a draft, computed from explicit state."""

    name: str
    category: Optional[str] = None
    service_type_label: str
    product_title: Optional[str] = None
    variant_titles: list[str] = Field(default_factory=list)
    price: Optional[str] = None
    location_count: int = 0
    staff_count: int = 0
    customer_field_count: int = 0
    hide_location_selection: bool = False
    hide_staff_selection: bool = False
    policy: ResolvedBookingPolicy


def project_draft(draft: Service, catalog: Optional[ProductCatalog] = None) -> DraftProjection:
    """Review-screen summary of a draft.

    No selected variant means every variant of the product. Price is the
    first variant's catalog string, passed through untouched.
    """
    product_title = None
    variant_titles: list[str] = []
    price = None
    if draft.product is not None and catalog is not None:
        product = catalog.get_product(draft.product.product_id)
        if product is not None:
            product_title = product.title
            if draft.product.variant_ids:
                variants = catalog.get_variants(product.id, draft.product.variant_ids)
            else:
                variants = product.variants
            variant_titles = [v.title for v in variants]
            price = variants[0].price if variants else None

    return DraftProjection(
        name=draft.name.strip() or "Service name",
        category=draft.category,
        service_type_label=SERVICE_TYPE_LABELS.get(draft.service_type, STANDALONE_LABEL),
        product_title=product_title,
        variant_titles=variant_titles,
        price=price,
        location_count=len(draft.location_ids),
        staff_count=len(draft.staff_ids),
        customer_field_count=len(draft.customer_fields),
        hide_location_selection=draft.hide_location_selection,
        hide_staff_selection=draft.hide_staff_selection,
        policy=resolve_booking_policy(draft),
    )
