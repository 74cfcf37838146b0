"""Service aggregate and the collaborator-facing records around it."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from booking_admin.schemas.customer_schema import CustomerField
from booking_admin.schemas.policy_schema import (
    BundleBookingPolicy,
    CancellationPolicy,
    CapacityPolicy,
    LeadTime,
    PaymentPreference,
    ReschedulePolicy,
)
from booking_admin.schemas.slot_schema import (
    MultiDayConstraint,
    ServiceType,
    SlotConfiguration,
)


class LocationType(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class ProductSelection(BaseModel):
    """Opaque reference into the external product catalog."""

    product_id: str
    variant_ids: list[str] = Field(default_factory=list)


class ProductVariant(BaseModel):
    id: str
    title: str
    price: str  # decimal string, never used for arithmetic
    image: Optional[str] = None


class Product(BaseModel):
    id: str
    title: str
    variants: list[ProductVariant] = Field(default_factory=list)


class Service(BaseModel):
    """Aggregate root edited tab by tab in the admin UI.

    Optional sections carry defaults so that an edit-mode save is never
    blocked by an untouched tab.
    """

    id: Optional[int] = None
    name: str = ""
    category: Optional[str] = None
    timezone: Optional[str] = None
    service_type: Optional[ServiceType] = None
    product: Optional[ProductSelection] = None
    duration: int = 60
    duration_unit: str = "Minutes"
    slot_configuration: Optional[SlotConfiguration] = None
    bundle: Optional[BundleBookingPolicy] = None
    capacity: CapacityPolicy = Field(default_factory=CapacityPolicy)
    cancellation: CancellationPolicy = Field(default_factory=CancellationPolicy)
    reschedule: ReschedulePolicy = Field(default_factory=ReschedulePolicy)
    lead_time: LeadTime = Field(default_factory=LeadTime)
    visibility_days: Optional[int] = None
    max_product_quantities: Optional[int] = None
    payment: Optional[PaymentPreference] = None
    customer_fields: list[CustomerField] = Field(default_factory=list)
    location_type: Optional[LocationType] = None
    location_ids: list[int] = Field(default_factory=list)
    staff_ids: list[int] = Field(default_factory=list)
    hide_location_selection: bool = False
    hide_staff_selection: bool = False
    notification_email: Optional[str] = None

    @property
    def multi_day(self) -> Optional[MultiDayConstraint]:
        if self.slot_configuration is None:
            return None
        return self.slot_configuration.multi_day


class ShopSettings(BaseModel):
    """Shop-wide settings that decide who hears about new bookings."""

    admin_email: Optional[str] = None
    additional_emails: str = ""
    refund_on_booking_cancel: bool = False
    slot_reservation_minutes: Optional[int] = None
