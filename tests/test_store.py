"""Tests for the in-memory service store."""

import pytest

from booking_admin.errors import (
    DivergentWindowsError,
    ServiceNotFoundError,
    ServiceTypeLockedError,
)
from booking_admin.schemas.policy_schema import FullPayment
from booking_admin.schemas.slot_schema import DaySlot, ServiceType, Weekday
from booking_admin.service.validator import validate_step
from booking_admin.slots.slot_builder import add_slot, update_slot
from tests.conftest import make_complete_service, make_service


class TestSaveService:
    def test_assigns_ids(self, store):
        first = store.save_service(make_service())
        second = store.save_service(make_service(name="Pilates"))
        assert (first.id, second.id) == (1, 2)

    def test_round_trip(self, store, complete_service):
        saved = store.save_service(complete_service)
        assert saved.model_dump(exclude={"id"}) == complete_service.model_dump(exclude={"id"})

    def test_payment_preference_survives(self, store):
        saved = store.save_service(make_complete_service(payment=FullPayment(name="Upfront")))
        assert isinstance(saved.payment, FullPayment)
        assert saved.payment.name == "Upfront"

    def test_slot_record_is_canonical(self, store):
        saved = store.save_service(make_service())
        row = store.get_slot_record(saved.id)
        assert row["slot_configuration"]["days"][0] == "monday"

    def test_slot_record_replaced_on_save(self, store):
        saved = store.save_service(make_service())
        first_record = store.get_slot_record(saved.id)["id"]
        saved.slot_configuration = add_slot(saved.slot_configuration, Weekday.MONDAY)
        store.save_service(saved)
        row = store.get_slot_record(saved.id)
        assert row["id"] != first_record
        assert len(store._slots) == 1

    def test_save_without_slots_keeps_record(self, store):
        saved = store.save_service(make_service())
        record_id = store.get_slot_record(saved.id)["id"]
        saved.slot_configuration = None
        reloaded = store.save_service(saved)
        assert store.get_slot_record(saved.id)["id"] == record_id
        assert reloaded.slot_configuration is not None

    def test_unknown_id(self, store):
        with pytest.raises(ServiceNotFoundError):
            store.save_service(make_service(id=99))

    def test_type_locked_once_slots_exist(self, store):
        saved = store.save_service(make_service())
        saved.service_type = ServiceType.FULL_DAY
        with pytest.raises(ServiceTypeLockedError):
            store.save_service(saved)

    def test_regular_breaks_persist(self, store):
        service = make_service()
        config = update_slot(service.slot_configuration, Weekday.MONDAY, 0, "end", "12:00")
        config = add_slot(config, Weekday.MONDAY)
        config = update_slot(config, Weekday.MONDAY, 1, "start", "13:00")
        saved = store.save_service(service.model_copy(update={"slot_configuration": config}))
        assert saved.slot_configuration.slots_for(Weekday.MONDAY) == [
            DaySlot(start="09:00", end="12:00"), DaySlot(start="13:00", end="17:00"),
        ]


    def test_weekend_edit_keeps_availability_and_validity(self, store, complete_service):
        config = add_slot(complete_service.slot_configuration, Weekday.SATURDAY)
        config = update_slot(config, Weekday.SATURDAY, 0, "end", "13:00")
        service = complete_service.model_copy(update={"slot_configuration": config})
        assert validate_step(service, 0) == []

        saved = store.save_service(service)
        assert saved.slot_configuration == config
        assert validate_step(saved, 0) == []

    def test_divergent_regular_grid_not_saved(self, store):
        service = make_service()
        service.slot_configuration.days[Weekday.TUESDAY] = [DaySlot(start="10:00", end="12:00")]
        with pytest.raises(DivergentWindowsError):
            store.save_service(service)
        assert store.list_services() == []

class TestReadAndDelete:
    def test_legacy_weekly_record_migrated(self, store):
        service_id = store.import_record(
            {"id": 7, "name": "Old service", "service_type": "regular"},
            slot_configuration={
                "monday": [{"start": "10:00", "end": "14:00"}],
                "saturday": [{"start": "10:00", "end": "14:00"}],
            },
        )
        service = store.get_service(service_id)
        assert service.slot_configuration.open_days() == [Weekday.MONDAY, Weekday.SATURDAY]
        assert store.save_service(make_service()).id == 8

    def test_record_without_slots(self, store):
        service_id = store.import_record({"name": "Bare", "service_type": "full-day"})
        assert store.get_service(service_id).slot_configuration is None

    def test_get_missing(self, store):
        with pytest.raises(ServiceNotFoundError):
            store.get_service(1)

    def test_list_services(self, store):
        store.save_service(make_service(name="A"))
        store.save_service(make_service(name="B"))
        assert [s.name for s in store.list_services()] == ["A", "B"]

    def test_delete_removes_slots(self, store):
        saved = store.save_service(make_service())
        store.delete_service(saved.id)
        assert store.get_slot_record(saved.id) is None
        with pytest.raises(ServiceNotFoundError):
            store.get_service(saved.id)

    def test_delete_missing(self, store):
        with pytest.raises(ServiceNotFoundError):
            store.delete_service(5)
