from booking_admin.service.booking_policy import resolve_booking_policy
from booking_admin.service.customer_fields import (
    FieldResult,
    FieldStatus,
    add_field,
    default_customer_fields,
    remove_field,
    toggle_setting,
    update_field,
)
from booking_admin.service.drafts import change_service_type, create_service, project_draft
from booking_admin.service.handoff import build_engine_payload
from booking_admin.service.validator import validate_for_save, validate_policies, validate_step
from booking_admin.service.wizard import ServiceWizard, WizardStep

__all__ = [
    "resolve_booking_policy",
    "FieldResult",
    "FieldStatus",
    "add_field",
    "update_field",
    "toggle_setting",
    "remove_field",
    "default_customer_fields",
    "create_service",
    "change_service_type",
    "project_draft",
    "build_engine_payload",
    "validate_step",
    "validate_policies",
    "validate_for_save",
    "ServiceWizard",
    "WizardStep",
]
