"""Customer intake field definitions collected at booking time."""

from enum import Enum

from pydantic import BaseModel


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    DATE = "date"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"


class CustomerField(BaseModel):
    """One entry in a service's ordered intake form."""

    id: int
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    visible: bool = True
