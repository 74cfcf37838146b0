"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from booking_admin.integrations.catalog import StaticProductCatalog
from booking_admin.integrations.store import InMemoryServiceStore
from booking_admin.schemas.policy_schema import BookNowPayLater
from booking_admin.schemas.service_schema import LocationType, ProductSelection, Service
from booking_admin.schemas.slot_schema import ServiceType
from booking_admin.service.customer_fields import default_customer_fields
from booking_admin.service.drafts import create_service


@pytest.fixture
def fields():
    return default_customer_fields()


@pytest.fixture
def store():
    return InMemoryServiceStore()


@pytest.fixture
def catalog():
    return StaticProductCatalog({
        "gid://shopify/Product/100": {
            "title": "Yoga Class",
            "variants": [
                {"id": "v1", "title": "Drop-in", "price": "25.00"},
                {"id": "v2", "title": "Five pack", "price": "110.00", "image": "https://cdn.example.com/y.png"},
            ],
        },
    })


def make_service(
    service_type: ServiceType = ServiceType.REGULAR,
    name: str = "Yoga Class",
    product_id: Optional[str] = "gid://shopify/Product/100",
    variant_ids: Optional[list[str]] = None,
    **overrides,
) -> Service:
    """Helper to create a draft service with sensible defaults."""
    if variant_ids is None:
        variant_ids = ["v1"]
    product = ProductSelection(product_id=product_id, variant_ids=variant_ids) if product_id else None
    return create_service(service_type, name=name, product=product, **overrides)


def make_complete_service(service_type: ServiceType = ServiceType.REGULAR, **overrides) -> Service:
    """A draft that passes every wizard step."""
    data = {
        "location_type": LocationType.OFFLINE,
        "location_ids": [1, 2],
        "staff_ids": [7],
        "payment": BookNowPayLater(name="Pay at studio"),
    }
    data.update(overrides)
    return make_service(service_type, **data)


@pytest.fixture
def regular_service():
    return make_service(ServiceType.REGULAR)


@pytest.fixture
def complete_service():
    return make_complete_service()
