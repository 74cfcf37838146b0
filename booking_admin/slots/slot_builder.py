"""
Slot configuration builder: add/remove/update mutators plus the canonical
serialization persisted in the Slots record.

Every mutator returns a new SlotConfiguration and leaves its input alone.
Mutators accept odd but representable states (inverted or overlapping
windows) because the admin form passes through them while editing;
validation is a separate step.

Usage:
    config = default_configuration(ServiceType.REGULAR)
    config = add_slot(config, Weekday.SATURDAY)
    config = update_slot(config, Weekday.SATURDAY, 0, "end", "13:00")
    record = to_canonical_form(config)
"""

import logging
from typing import Any, Optional

from booking_admin.errors import DivergentWindowsError
from booking_admin.schemas.slot_schema import (
    ALL_DAYS,
    ConsecutivenessRule,
    DaySlot,
    FlatSlotConfiguration,
    MultiDayConstraint,
    ServiceType,
    SlotConfiguration,
    Weekday,
)
from booking_admin.slots.service_types import (
    FULL_DAY_LADDER,
    closed_day,
    coerce_service_type,
    default_slot,
)

logger = logging.getLogger(__name__)

SLOT_FIELDS = ("start", "end")


def _with_day(config: SlotConfiguration, day: Weekday, slots: list[DaySlot]) -> SlotConfiguration:
    updated = config.model_copy(deep=True)
    updated.days[day] = slots
    return updated


def _copy_slots(config: SlotConfiguration, day: Weekday) -> list[DaySlot]:
    return [slot.model_copy() for slot in config.days[day]]


def _check_index(slots: list[DaySlot], day: Weekday, index: int) -> None:
    if not 0 <= index < len(slots):
        raise IndexError(f"No slot {index} on {day.value} ({len(slots)} slots)")


def _shared_windows(config: SlotConfiguration) -> list[DaySlot]:
    """The window list every open day of a regular service shares."""
    for day in ALL_DAYS:
        if config.days[day]:
            return _copy_slots(config, day)
    return []


def _with_shared_windows(
    config: SlotConfiguration, windows: list[DaySlot], open_days: list[Weekday],
) -> SlotConfiguration:
    updated = config.model_copy(deep=True)
    for day in ALL_DAYS:
        updated.days[day] = [w.model_copy() for w in windows] if day in open_days else []
    return updated


def _append_break(slots: list[DaySlot]) -> list[DaySlot]:
    """
    Append a one-step break after the last full-day slot.

    When the ladder has no room after it, the last slot is shortened so
    the break fits inside its old window. Slots too short to split are
    left as they are.
    """
    previous = slots[-1]
    if previous.start not in FULL_DAY_LADDER or previous.end not in FULL_DAY_LADDER:
        logger.info("No break added after unlisted slot %s-%s", previous.start, previous.end)
        return slots

    last = len(FULL_DAY_LADDER) - 1
    start_index = FULL_DAY_LADDER.index(previous.start)
    end_index = FULL_DAY_LADDER.index(previous.end)
    if end_index + 2 > last:
        end_index = last - 2
        if end_index <= start_index:
            logger.info("No room for a break after %s-%s", previous.start, previous.end)
            return slots
        slots[-1] = previous.model_copy(update={"end": FULL_DAY_LADDER[end_index]})

    slots.append(DaySlot(start=FULL_DAY_LADDER[end_index + 1], end=FULL_DAY_LADDER[end_index + 2]))
    return slots


def add_slot(config: SlotConfiguration, day) -> SlotConfiguration:
    """Append a slot to ``day``.

    Regular services share one window list across their open days: adding
    to an open day adds a window everywhere, adding to a closed day opens
    it with the shared windows. Full-day services get a break slot after
    the previous one; a day that is Off is reopened with the default
    all-day slot.
    """
    day = Weekday(day)

    if config.service_type == ServiceType.REGULAR:
        windows = _shared_windows(config) or [default_slot(config.service_type)]
        open_days = config.open_days()
        if day in open_days:
            windows.append(default_slot(config.service_type))
        else:
            open_days.append(day)
        logger.debug("Slot added on %s (%d shared window(s))", day.value, len(windows))
        return _with_shared_windows(config, windows, open_days)

    slots = _copy_slots(config, day)
    if config.service_type == ServiceType.FULL_DAY:
        if not slots or all(slot.is_off() for slot in slots):
            slots = [default_slot(config.service_type)]
        else:
            slots = _append_break(slots)
    else:
        slots.append(default_slot(config.service_type))

    logger.debug("Slot added on %s (%d total)", day.value, len(slots))
    return _with_day(config, day, slots)


def remove_slot(config: SlotConfiguration, day, index: int) -> SlotConfiguration:
    """Remove the slot at ``index``.

    A day that had slots is never left empty: removing the last one resets
    the day to the default slot. Use close_day to close a day.
    """
    day = Weekday(day)
    slots = _copy_slots(config, day)
    _check_index(slots, day, index)

    del slots[index]
    if not slots:
        slots = [default_slot(config.service_type)]

    logger.debug("Slot %d removed on %s", index, day.value)
    if config.service_type == ServiceType.REGULAR:
        return _with_shared_windows(config, slots, config.open_days())
    return _with_day(config, day, slots)


def update_slot(config: SlotConfiguration, day, index: int, field: str, value: str) -> SlotConfiguration:
    """Replace the start or end of one slot. No ordering or overlap correction.

    For regular services the change applies to every open day.
    """
    if field not in SLOT_FIELDS:
        raise ValueError(f"Unknown slot field: {field!r}. Expected one of {list(SLOT_FIELDS)}")

    day = Weekday(day)
    slots = _copy_slots(config, day)
    _check_index(slots, day, index)

    slots[index] = slots[index].model_copy(update={field: value})
    if config.service_type == ServiceType.REGULAR:
        return _with_shared_windows(config, slots, config.open_days())
    return _with_day(config, day, slots)


def close_day(config: SlotConfiguration, day) -> SlotConfiguration:
    """Mark ``day`` closed in the representation its service type uses."""
    day = Weekday(day)
    return _with_day(config, day, closed_day(config.service_type))


def _slot_dict(slot: DaySlot) -> dict[str, str]:
    return {"start": slot.start, "end": slot.end}


def _weekly_map(config: SlotConfiguration) -> dict[str, list[dict[str, str]]]:
    return {day.value: [_slot_dict(s) for s in config.days[day]] for day in ALL_DAYS}


def windows_differ(config: SlotConfiguration) -> bool:
    """True when the open days of a weekly grid carry different window lists."""
    per_day = {
        tuple((s.start, s.end) for s in config.days[day])
        for day in ALL_DAYS if config.days[day]
    }
    return len(per_day) > 1


def _flatten(config: SlotConfiguration, merge: bool = False) -> FlatSlotConfiguration:
    """
    Collapse a weekly grid into the shared-window encoding.

    Raises:
        DivergentWindowsError: when open days differ and ``merge`` is off.
            With ``merge`` the union of all windows is kept, in first
            appearance order.
    """
    open_days = [day for day in ALL_DAYS if config.days[day]]
    if not windows_differ(config):
        windows = _copy_slots(config, open_days[0]) if open_days else []
        return FlatSlotConfiguration(slots=windows, days=open_days)

    if not merge:
        raise DivergentWindowsError(
            "Regular slot windows differ across open days; "
            "every open day must share the same windows"
        )

    windows: list[DaySlot] = []
    seen: set[tuple[str, str]] = set()
    for day in open_days:
        for slot in config.days[day]:
            key = (slot.start, slot.end)
            if key not in seen:
                seen.add(key)
                windows.append(slot)
    logger.warning(
        "Weekly slots differ across days; merging into %d shared window(s) on %d day(s)",
        len(windows), len(open_days),
    )
    return FlatSlotConfiguration(slots=windows, days=open_days)


def _flat_record(flat: FlatSlotConfiguration) -> dict[str, Any]:
    return {
        "slots": [_slot_dict(s) for s in flat.slots],
        "days": [d.value for d in flat.days],
    }


def to_canonical_form(config: SlotConfiguration, service_type=None) -> dict[str, Any]:
    """
    The exact JSON-shaped value stored in the Slots record.

    regular:   {"slots": [...], "days": [...]}
    full-day:  {"monday": [...], ..., "sunday": [...]}
    multi-day: weekly map plus a "constraint" object

    Raises:
        DivergentWindowsError: for a regular grid whose open days differ.
    """
    service_type = coerce_service_type(service_type or config.service_type)

    if service_type == ServiceType.REGULAR:
        return _flat_record(_flatten(config))

    record: dict[str, Any] = _weekly_map(config)
    if service_type == ServiceType.MULTI_DAY:
        constraint = config.multi_day or MultiDayConstraint()
        record["constraint"] = {
            "minDays": constraint.min_days,
            "maxDays": constraint.max_days,
            "allowedDays": [d.value for d in constraint.allowed_weekdays],
            "multiDayBooking": constraint.consecutiveness_rule.value,
        }
    return record


def _parse_weekly(data: dict[str, Any]) -> dict[Weekday, list[DaySlot]]:
    return {
        day: [DaySlot(**slot) for slot in (data.get(day.value) or [])]
        for day in ALL_DAYS
    }


def is_legacy_weekly_regular(data: dict[str, Any]) -> bool:
    return "slots" not in data and any(day.value in data for day in ALL_DAYS)


def migrate_weekly_regular(data: dict[str, Any]) -> dict[str, Any]:
    """
    One-time conversion of a legacy per-weekday regular record to the flat form.

    Days with different windows are merged into their union, in first
    appearance order, and a warning is logged.
    """
    config = SlotConfiguration(service_type=ServiceType.REGULAR, days=_parse_weekly(data))
    migrated = _flat_record(_flatten(config, merge=True))
    logger.info(
        "Migrated legacy weekly regular slots: %d window(s) on %s",
        len(migrated["slots"]), ", ".join(migrated["days"]) or "no days",
    )
    return migrated


def from_canonical_form(data: dict[str, Any], service_type) -> SlotConfiguration:
    """Rebuild the editable configuration from a canonical record."""
    service_type = coerce_service_type(service_type)

    if service_type == ServiceType.REGULAR:
        flat = FlatSlotConfiguration.model_validate(data)
        days = {
            day: [slot.model_copy() for slot in flat.slots] if day in flat.days else []
            for day in ALL_DAYS
        }
        return SlotConfiguration(service_type=service_type, days=days)

    multi_day: Optional[MultiDayConstraint] = None
    if service_type == ServiceType.MULTI_DAY:
        raw = data.get("constraint") or {}
        multi_day = MultiDayConstraint(
            min_days=raw.get("minDays", 1),
            max_days=raw.get("maxDays", 1),
            allowed_weekdays=raw.get("allowedDays", MultiDayConstraint().allowed_weekdays),
            consecutiveness_rule=raw.get("multiDayBooking", ConsecutivenessRule.FLEXIBLE),
        )
    return SlotConfiguration(
        service_type=service_type, days=_parse_weekly(data), multi_day=multi_day,
    )


def parse_slot_configuration(data: Optional[dict[str, Any]], service_type) -> Optional[SlotConfiguration]:
    """Read a stored record in either regular encoding. None stays None."""
    if data is None:
        return None
    service_type = coerce_service_type(service_type)
    if service_type == ServiceType.REGULAR and is_legacy_weekly_regular(data):
        data = migrate_weekly_regular(data)
    return from_canonical_form(data, service_type)
