"""
Customer intake field schema for a service.

Operations take the current field list and return a FieldResult holding
the new list. Rejected or colliding changes return the original list
untouched, so callers can always render ``result.fields``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from booking_admin.errors import ValidationError
from booking_admin.schemas.customer_schema import CustomerField, FieldType
from booking_admin.utils import slugify_label

logger = logging.getLogger(__name__)

TOGGLE_SETTINGS = ("required", "visible")


class FieldStatus(str, Enum):
    OK = "ok"
    COLLISION = "collision"
    REJECTED = "rejected"


@dataclass
class FieldResult:
    """Outcome of a field-list change."""
    status: FieldStatus
    fields: list[CustomerField]
    field: Optional[CustomerField] = None
    existing: Optional[CustomerField] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.status == FieldStatus.OK


def default_customer_fields() -> list[CustomerField]:
    """The four built-in fields every new service starts with."""
    return [
        CustomerField(id=1, name="firstName", label="First name", type=FieldType.TEXT, required=True),
        CustomerField(id=2, name="lastName", label="Last name", type=FieldType.TEXT, required=True),
        CustomerField(id=3, name="phone", label="Phone No", type=FieldType.TEL, required=True),
        CustomerField(id=4, name="email", label="Email", type=FieldType.EMAIL, required=True),
    ]


def _next_id(fields: list[CustomerField]) -> int:
    return max((f.id for f in fields), default=0) + 1


def _unique_name(base: str, fields: list[CustomerField]) -> str:
    taken = {f.name for f in fields}
    if base not in taken:
        return base
    suffix = 2
    while f"{base}_{suffix}" in taken:
        suffix += 1
    return f"{base}_{suffix}"


def _find_label(fields: list[CustomerField], label: str, exclude_id=None) -> Optional[CustomerField]:
    wanted = label.strip().casefold()
    for f in fields:
        if f.id != exclude_id and f.label.strip().casefold() == wanted:
            return f
    return None


def _check_input(fields: list[CustomerField], label: str, field_type) -> Optional[FieldResult]:
    if not label or not label.strip():
        return FieldResult(
            FieldStatus.REJECTED, fields,
            error=ValidationError("empty_label", "Field label is required.", field="label"),
        )
    try:
        FieldType(field_type)
    except ValueError:
        return FieldResult(
            FieldStatus.REJECTED, fields,
            error=ValidationError(
                "invalid_type", f"Unsupported field type: {field_type!r}.", field="type",
            ),
        )
    return None


def add_field(fields: list[CustomerField], label: str, field_type="text") -> FieldResult:
    """Append a new optional, visible field derived from ``label``."""
    rejected = _check_input(fields, label, field_type)
    if rejected:
        return rejected

    existing = _find_label(fields, label)
    if existing:
        logger.debug("Field label '%s' collides with field %s", label, existing.id)
        return FieldResult(FieldStatus.COLLISION, fields, existing=existing)

    new_field = CustomerField(
        id=_next_id(fields),
        name=_unique_name(slugify_label(label), fields),
        label=label.strip(),
        type=FieldType(field_type),
        required=False,
        visible=True,
    )
    logger.debug("Customer field added: %s", new_field.name)
    return FieldResult(FieldStatus.OK, [*fields, new_field], field=new_field)


def update_field(fields: list[CustomerField], field_id: int, label: str, field_type) -> FieldResult:
    """Replace label and type of one field. Unknown ids leave the list unchanged."""
    rejected = _check_input(fields, label, field_type)
    if rejected:
        return rejected

    existing = _find_label(fields, label, exclude_id=field_id)
    if existing:
        return FieldResult(FieldStatus.COLLISION, fields, existing=existing)

    updated: list[CustomerField] = []
    changed: Optional[CustomerField] = None
    for f in fields:
        if f.id == field_id:
            changed = f.model_copy(update={"label": label.strip(), "type": FieldType(field_type)})
            updated.append(changed)
        else:
            updated.append(f)
    return FieldResult(FieldStatus.OK, updated, field=changed)


def toggle_setting(fields: list[CustomerField], field_id: int, setting: str) -> list[CustomerField]:
    """Flip ``required`` or ``visible`` on one field."""
    if setting not in TOGGLE_SETTINGS:
        raise ValueError(f"Unknown field setting: {setting!r}. Expected one of {list(TOGGLE_SETTINGS)}")
    return [
        f.model_copy(update={setting: not getattr(f, setting)}) if f.id == field_id else f
        for f in fields
    ]


def remove_field(fields: list[CustomerField], field_id: int) -> list[CustomerField]:
    """Delete a field. Built-in fields are not protected."""
    return [f for f in fields if f.id != field_id]


def move_field(fields: list[CustomerField], field_id: int, index: int) -> list[CustomerField]:
    """Move a field to ``index`` (clamped). Unknown ids leave the order unchanged."""
    moving = next((f for f in fields if f.id == field_id), None)
    if moving is None:
        return list(fields)
    rest = [f for f in fields if f.id != field_id]
    index = max(0, min(index, len(rest)))
    return rest[:index] + [moving] + rest[index:]


def visible_fields(fields: list[CustomerField]) -> list[CustomerField]:
    return [f for f in fields if f.visible]
