"""Form widgets shared by the inspector and the create dialog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Input, Label, Select

from model import Gender

if TYPE_CHECKING:
    from controller.field_mappings import FormField
    from textual.dom import DOMNode

GENDER_OPTIONS = [(gender.value.title(), gender.value) for gender in Gender]


def compose_form(prefix: str, fields: list[FormField], values: dict[str, str]) -> ComposeResult:
    """Yield a label + input pair for every field.

    Args:
        prefix: Widget id prefix, keeps ids unique per form
        fields: Fields to render, in order
        values: Initial UI values keyed by record field name
    """
    for field in fields:
        widget_id = field.widget_id(prefix)
        with Vertical(classes="form-field"):
            yield Label(field.label, classes="form-label")
            if field.record_field == "gender":
                yield Select(
                    GENDER_OPTIONS,
                    value=values.get("gender", Gender.MALE.value),
                    allow_blank=False,
                    id=widget_id,
                )
            else:
                yield Input(
                    value=values.get(field.record_field, ""),
                    placeholder=field.label,
                    id=widget_id,
                )


def read_form(root: DOMNode, prefix: str, fields: list[FormField]) -> dict[str, str]:
    """Collect the raw UI values of a form, keyed by record field name."""
    raw: dict[str, str] = {}
    for field in fields:
        try:
            widget = root.query_one(f"#{field.widget_id(prefix)}")
        except NoMatches:
            continue
        if isinstance(widget, Select):
            raw[field.record_field] = widget.value if isinstance(widget.value, str) else ""
        else:
            raw[field.record_field] = widget.value
    return raw


def write_form(root: DOMNode, prefix: str, fields: list[FormField], values: dict[str, Any]) -> None:
    """Set the UI values of a form (caller should prevent Changed messages)."""
    for field in fields:
        if field.record_field not in values:
            continue
        try:
            widget = root.query_one(f"#{field.widget_id(prefix)}")
        except NoMatches:
            continue
        widget.value = values[field.record_field]
