"""UI helper functions for userdesk."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.widget import Widget

    from model import UserRecord


def format_dob_date(record: UserRecord) -> str:
    """Date part of the date of birth for the table (falls back to the raw string)."""
    born = record.born_at
    if born is None:
        return record.date_of_birth
    return born.strftime("%Y-%m-%d")


def format_dob_full(record: UserRecord) -> str:
    """Date and time of birth for the inspector."""
    born = record.born_at
    if born is None:
        return record.date_of_birth
    return born.strftime("%Y-%m-%d %H:%M:%S")


def dob_input_value(record: UserRecord) -> str:
    """Initial value for a date-of-birth input: at most the first 19 characters.

    That trims fractional seconds and offsets the way a datetime-local field
    would, while a plain date passes through untouched.
    """
    return record.date_of_birth[:19]


def set_hidden(widget: Widget, hidden: bool) -> None:
    """Show or hide a widget via the shared "hidden" class."""
    if hidden:
        widget.add_class("hidden")
    else:
        widget.remove_class("hidden")
