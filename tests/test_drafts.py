"""Tests for draft creation, service type changes, and the review projection."""

import pytest

from booking_admin.errors import ServiceTypeLockedError, UnknownServiceTypeError
from booking_admin.schemas.policy_schema import BundleBookingPolicy
from booking_admin.schemas.slot_schema import ServiceType, Weekday
from booking_admin.service.drafts import change_service_type, create_service, project_draft
from tests.conftest import make_service


class TestCreateService:
    def test_regular_defaults(self):
        service = create_service()
        assert service.service_type == ServiceType.REGULAR
        assert service.slot_configuration.open_days() == [
            Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY,
        ]
        assert len(service.customer_fields) == 4

    def test_type_from_string(self):
        assert create_service("full-day").service_type == ServiceType.FULL_DAY

    def test_multi_day_constraint_seeded(self):
        service = create_service(ServiceType.MULTI_DAY)
        assert service.multi_day.min_days == 1

    def test_unknown_type(self):
        with pytest.raises(UnknownServiceTypeError):
            create_service("hourly")

    def test_overrides(self):
        service = create_service(name="Massage", duration=90)
        assert (service.name, service.duration) == ("Massage", 90)


class TestChangeServiceType:
    def test_reseeds_slots(self):
        changed = change_service_type(make_service(), ServiceType.FULL_DAY)
        assert changed.service_type == ServiceType.FULL_DAY
        assert changed.slot_configuration.service_type == ServiceType.FULL_DAY
        assert changed.slot_configuration.slots_for(Weekday.SUNDAY)[0].is_off()

    def test_drops_bundle_for_non_regular(self):
        service = make_service(bundle=BundleBookingPolicy(enabled=True, min_slots=1))
        assert change_service_type(service, "multi-day").bundle is None

    def test_same_type_is_noop(self):
        service = make_service()
        assert change_service_type(service, "regular") is service

    def test_locked_once_saved(self):
        service = make_service(id=12)
        with pytest.raises(ServiceTypeLockedError):
            change_service_type(service, ServiceType.FULL_DAY)

    def test_original_untouched(self):
        service = make_service()
        change_service_type(service, ServiceType.FULL_DAY)
        assert service.service_type == ServiceType.REGULAR


class TestProjectDraft:
    def test_catalog_details(self, catalog):
        projection = project_draft(make_service(), catalog)
        assert projection.product_title == "Yoga Class"
        assert projection.variant_titles == ["Drop-in"]
        assert projection.price == "25.00"
        assert projection.service_type_label == "Regular"

    def test_all_variants_when_none_selected(self, catalog):
        service = make_service(variant_ids=[])
        projection = project_draft(service, catalog)
        assert projection.variant_titles == ["Drop-in", "Five pack"]
        assert projection.price == "25.00"

    def test_selected_variants_in_catalog_order(self, catalog):
        service = make_service(variant_ids=["v2", "missing"])
        projection = project_draft(service, catalog)
        assert projection.variant_titles == ["Five pack"]
        assert projection.price == "110.00"

    def test_without_catalog(self):
        projection = project_draft(make_service())
        assert projection.product_title is None
        assert projection.price is None

    def test_unknown_product(self, catalog):
        projection = project_draft(make_service(product_id="gid://shopify/Product/404"), catalog)
        assert projection.product_title is None

    def test_placeholder_name(self):
        assert project_draft(make_service(name="  ")).name == "Service name"

    def test_standalone_label(self):
        service = make_service()
        service.service_type = None
        assert project_draft(service).service_type_label == "Standalone Service"

    def test_counts_and_policy(self, complete_service):
        projection = project_draft(complete_service)
        assert projection.location_count == 2
        assert projection.staff_count == 1
        assert projection.customer_field_count == 4
        assert projection.policy.payment_label == "Book Now, Pay Later"
