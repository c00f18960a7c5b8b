"""Mappings between user form widgets and UserRecord fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from controller.validators import (
    validate_bio,
    validate_date_of_birth,
    validate_gender,
    validate_name,
    validate_user_id,
)
from model import Gender
import ui.ids as ids


def _gender_to_ui(value: Gender) -> str:
    return value.value


def _optional_to_ui(value: str | None) -> str:
    return value or ""


@dataclass
class FormField:
    """Maps one form input to a record field."""

    suffix: str  # widget id = "<form prefix>-<suffix>"
    record_field: str
    label: str
    validate: Callable[[str], Any]
    to_ui: Callable[[Any], str] = str
    error: str = ""
    optional: bool = False  # None from validate is a valid value

    def widget_id(self, prefix: str) -> str:
        return f"{prefix}-{self.suffix}"


ID_FIELD = FormField(
    ids.FIELD_ID, "id", "Student ID", validate_user_id,
    error="Student ID must be a whole number",
)

# Fields that can change in an edit session (id is immutable)
EDITABLE_FIELDS: list[FormField] = [
    FormField(ids.FIELD_FIRST_NAME, "first_name", "First Name", validate_name,
              error="First name is required"),
    FormField(ids.FIELD_LAST_NAME, "last_name", "Last Name", validate_name,
              error="Last name is required"),
    FormField(ids.FIELD_GENDER, "gender", "Gender", validate_gender, _gender_to_ui,
              error="Gender must be MALE, FEMALE or OTHER"),
    FormField(ids.FIELD_DOB, "date_of_birth", "Date of Birth", validate_date_of_birth,
              error="Date of birth must be an ISO-8601 date"),
    FormField(ids.FIELD_BIO, "bio", "Biography", validate_bio, _optional_to_ui,
              optional=True),
]

# Create form: id first, then the editable fields
CREATE_FIELDS: list[FormField] = [ID_FIELD, *EDITABLE_FIELDS]


def parse_field(field: FormField, raw: str) -> tuple[Any, str | None]:
    """Validate one raw input value.

    Returns:
        (value, None) on success or (None, error message) on failure
    """
    value = field.validate(raw)
    if value is None and not field.optional:
        return None, field.error
    return value, None
