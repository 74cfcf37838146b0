from booking_admin.slots.service_types import (
    coerce_service_type,
    default_configuration,
    is_valid_label,
    valid_labels,
)
from booking_admin.slots.slot_builder import (
    add_slot,
    close_day,
    from_canonical_form,
    migrate_weekly_regular,
    parse_slot_configuration,
    remove_slot,
    to_canonical_form,
    update_slot,
    windows_differ,
)

__all__ = [
    "coerce_service_type", "default_configuration", "is_valid_label", "valid_labels",
    "add_slot", "remove_slot", "update_slot", "close_day",
    "to_canonical_form", "from_canonical_form", "migrate_weekly_regular",
    "parse_slot_configuration", "windows_differ",
]
