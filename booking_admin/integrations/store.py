"""
Service persistence contract and an in-memory implementation.

Mirrors the relational layout the admin app writes: one row per service
with JSON-capable columns, plus a Slots row holding the canonical slot
configuration. Saving replaces the service's slot row wholesale
(delete-then-recreate); a save without a slot configuration leaves the
stored one alone.
"""

from typing import Any, Optional, Protocol

from booking_admin.errors import ServiceNotFoundError, ServiceTypeLockedError
from booking_admin.logging_context import get_request_logger
from booking_admin.schemas.service_schema import Service
from booking_admin.slots.service_types import coerce_service_type
from booking_admin.slots.slot_builder import parse_slot_configuration, to_canonical_form

logger = get_request_logger(__name__)


class ServiceStore(Protocol):
    def save_service(self, service: Service) -> Service:
        ...

    def get_service(self, service_id: int) -> Service:
        ...

    def delete_service(self, service_id: int) -> None:
        ...


class InMemoryServiceStore:
    """Dict-backed store keyed by integer ids."""

    def __init__(self) -> None:
        self._services: dict[int, dict[str, Any]] = {}
        self._slots: dict[int, dict[str, Any]] = {}
        self._next_service_id = 1
        self._next_slot_id = 1

    def _replace_slot_record(self, service_id: int, configuration: dict[str, Any]) -> int:
        self._slots = {
            rid: row for rid, row in self._slots.items() if row["service_id"] != service_id
        }
        record_id = self._next_slot_id
        self._next_slot_id += 1
        self._slots[record_id] = {
            "id": record_id,
            "service_id": service_id,
            "slot_configuration": configuration,
        }
        return record_id

    def import_record(
        self, record: dict[str, Any], slot_configuration: Optional[dict[str, Any]] = None,
    ) -> int:
        """Load a row exactly as stored, e.g. from an older database export."""
        service_id = record.get("id") or self._next_service_id
        self._next_service_id = max(self._next_service_id, service_id + 1)
        self._services[service_id] = {k: v for k, v in record.items() if k != "id"}
        if slot_configuration is not None:
            self._replace_slot_record(service_id, slot_configuration)
        return service_id

    def save_service(self, service: Service) -> Service:
        """Insert or replace a service. Returns the stored copy with its id."""
        service_id = service.id
        existing = self._services.get(service_id) if service_id is not None else None
        if service_id is not None and existing is None:
            raise ServiceNotFoundError(f"Service {service_id} not found")

        if existing is not None and self.get_slot_record(service_id) is not None:
            stored_type = existing.get("service_type")
            new_type = service.service_type.value if service.service_type else None
            if stored_type and new_type != stored_type:
                raise ServiceTypeLockedError(
                    f"Service {service_id} already has {stored_type!r} slots; "
                    f"cannot save it as {new_type!r}"
                )

        slot_record = None
        if service.slot_configuration is not None:
            slot_record = to_canonical_form(service.slot_configuration, service.service_type)

        if service_id is None:
            service_id = self._next_service_id
            self._next_service_id += 1

        self._services[service_id] = service.model_dump(
            mode="json", exclude={"id", "slot_configuration"},
        )
        if slot_record is not None:
            record_id = self._replace_slot_record(service_id, slot_record)
            logger.info("Service %s saved with slot record %s", service_id, record_id)
        else:
            logger.info("Service %s saved without slot changes", service_id)
        return self.get_service(service_id)

    def get_slot_record(self, service_id: int) -> Optional[dict[str, Any]]:
        for row in self._slots.values():
            if row["service_id"] == service_id:
                return row
        return None

    def get_service(self, service_id: int) -> Service:
        """Re-hydrate a service, reading legacy regular slot encodings."""
        record = self._services.get(service_id)
        if record is None:
            raise ServiceNotFoundError(f"Service {service_id} not found")

        slot_row = self.get_slot_record(service_id)
        slot_configuration = None
        if slot_row is not None and record.get("service_type"):
            service_type = coerce_service_type(record["service_type"])
            slot_configuration = parse_slot_configuration(
                slot_row["slot_configuration"], service_type,
            )
        return Service.model_validate({
            **record, "id": service_id, "slot_configuration": slot_configuration,
        })

    def list_services(self) -> list[Service]:
        return [self.get_service(sid) for sid in sorted(self._services)]

    def delete_service(self, service_id: int) -> None:
        if self._services.pop(service_id, None) is None:
            raise ServiceNotFoundError(f"Service {service_id} not found")
        self._slots = {
            rid: row for rid, row in self._slots.items() if row["service_id"] != service_id
        }
        logger.info("Service %s deleted", service_id)
