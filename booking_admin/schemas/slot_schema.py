"""Slot configuration data models shared by all service types."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ServiceType(str, Enum):
    """Temporal shape of a bookable offering. Fixed at creation."""

    REGULAR = "regular"
    FULL_DAY = "full-day"
    MULTI_DAY = "multi-day"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


ALL_DAYS: tuple[Weekday, ...] = tuple(Weekday)
WEEKDAYS: tuple[Weekday, ...] = ALL_DAYS[:5]

OFF = "Off"


class ConsecutivenessRule(str, Enum):
    FLEXIBLE = "flexible"
    CONSECUTIVE_ONLY = "consecutive-only"


class DaySlot(BaseModel):
    """A bookable time window within one day."""

    start: str
    end: str

    def is_off(self) -> bool:
        return self.start == OFF and self.end == OFF


class MultiDayConstraint(BaseModel):
    """Span rules for multi-day services.

    Ranges are not enforced here; see the service validator.
    """

    min_days: int = 1
    max_days: int = 1
    allowed_weekdays: list[Weekday] = Field(default_factory=lambda: list(WEEKDAYS))
    consecutiveness_rule: ConsecutivenessRule = ConsecutivenessRule.FLEXIBLE

    @field_validator("consecutiveness_rule", mode="before")
    @classmethod
    def _accept_legacy_rule(cls, value):
        # Older records store the radio value "consecutive"
        if value == "consecutive":
            return ConsecutivenessRule.CONSECUTIVE_ONLY
        return value


class SlotConfiguration(BaseModel):
    """Editable weekly slot grid for one service.

    Every weekday key is always present. An empty list means the day is
    closed for regular and multi-day services; full-day services mark a
    closed day with a single ``Off`` slot.
    """

    service_type: ServiceType
    days: dict[Weekday, list[DaySlot]] = Field(default_factory=dict)
    multi_day: Optional[MultiDayConstraint] = None

    @model_validator(mode="after")
    def _fill_missing_days(self) -> "SlotConfiguration":
        for day in ALL_DAYS:
            if self.days.get(day) is None:
                self.days[day] = []
        self.days = {day: self.days[day] for day in ALL_DAYS}
        return self

    def slots_for(self, day: Weekday) -> list[DaySlot]:
        return self.days[Weekday(day)]

    def open_days(self) -> list[Weekday]:
        """Weekdays with at least one slot that is not the Off sentinel."""
        return [
            day for day in ALL_DAYS
            if any(not slot.is_off() for slot in self.days[day])
        ]


class FlatSlotConfiguration(BaseModel):
    """Canonical regular-type encoding: one window list applied on each open day.

    A record without ``days`` applies its windows to the whole week.
    """

    slots: list[DaySlot] = Field(default_factory=list)
    days: list[Weekday] = Field(default_factory=lambda: list(ALL_DAYS))
