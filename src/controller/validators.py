"""Validation functions for user form input."""

import re
from datetime import datetime

from model import Gender

# datetime-local inputs drop the seconds ("2024-02-10T08:30")
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_user_id(value: str) -> int | None:
    """Validate a Student ID.

    Args:
        value: String value from input field

    Returns:
        Non-negative integer or None if invalid
    """
    stripped = value.strip()
    if not stripped.isdigit():
        return None
    return int(stripped)


def validate_name(value: str) -> str | None:
    """Validate a first or last name.

    Returns:
        Stripped name or None if empty
    """
    stripped = value.strip()
    return stripped or None


def validate_gender(value: str) -> Gender | None:
    """Validate gender (case-insensitive).

    Returns:
        Gender member or None if not one of MALE, FEMALE, OTHER
    """
    try:
        return Gender(value.strip().upper())
    except ValueError:
        return None


def validate_date_of_birth(value: str) -> str | None:
    """Validate a date of birth.

    Accepts a plain date ("2024-02-10") or any ISO-8601 date-time. The value
    is returned verbatim (only stripped) so it reaches the server unchanged.

    Returns:
        Stripped string or None if it does not parse as ISO-8601
    """
    stripped = value.strip()
    if not stripped:
        return None
    if _DATE_ONLY.match(stripped):
        try:
            datetime.strptime(stripped, "%Y-%m-%d")
        except ValueError:
            return None
        return stripped
    try:
        datetime.fromisoformat(stripped)
    except ValueError:
        return None
    return stripped


def validate_bio(value: str) -> str | None:
    """Empty biography means no biography."""
    return value if value.strip() else None
