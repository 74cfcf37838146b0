"""Booking policy models: the independently edited policy fields of a
service, and the resolved snapshot handed to the booking engine."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CutoffUnit(str, Enum):
    HOURS = "hours"
    DAYS = "days"


class BundleBookingPolicy(BaseModel):
    """Lets a customer reserve several slots in one booking. Regular services only."""

    enabled: bool = False
    min_slots: Optional[int] = None
    max_slots: Optional[int] = None


class CapacityPolicy(BaseModel):
    """None means unbounded."""

    max_concurrent_bookings_per_slot: Optional[int] = None


class CancellationPolicy(BaseModel):
    allowed: bool = False
    cutoff_value: Optional[float] = None
    cutoff_unit: Optional[CutoffUnit] = None


class ReschedulePolicy(BaseModel):
    allowed: bool = False
    cutoff_hours: Optional[int] = None


class LeadTime(BaseModel):
    """Minimum advanced notice between booking time and service start."""

    notice: int = 0
    unit: str = "Minutes"


class FullPayment(BaseModel):
    kind: Literal["fullPayment"] = "fullPayment"
    name: str = ""
    label: str = ""
    description: str = ""


class BookNowPayLater(BaseModel):
    kind: Literal["bookNowPayLater"] = "bookNowPayLater"
    name: str = ""
    description: str = ""


PaymentPreference = Annotated[
    Union[FullPayment, BookNowPayLater], Field(discriminator="kind")
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PolicySummary(_CamelModel):
    """Allowed flag plus the display label shown on the review screen."""

    allowed: bool
    label: str


class CancellationSummary(PolicySummary):
    cutoff_hours: Optional[float] = None


class RescheduleSummary(PolicySummary):
    cutoff_hours: Optional[int] = None


class BundleSummary(_CamelModel):
    enabled: bool = False
    min_slots: Optional[int] = None
    max_slots: Optional[int] = None


class ResolvedBookingPolicy(_CamelModel):
    """Derived on read from a service's policy fields. Never persisted."""

    lead_time_label: str
    lead_time_minutes: int
    visibility_days: int
    visibility_label: str
    cancellation: CancellationSummary
    reschedule: RescheduleSummary
    capacity_per_slot: Optional[int] = None
    capacity_label: str
    bundle: BundleSummary
    max_quantity_per_booking: int
    payment_kind: str
    payment_label: str
