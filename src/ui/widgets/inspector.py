"""Selected-user widget: InspectorPanel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, Select, Static

from model import UserRecord
from ui.helpers import dob_input_value, format_dob_full, set_hidden
from ui.ids import css
from ui.widgets.form import compose_form, write_form
import ui.ids as ids


def record_to_ui(record: UserRecord) -> dict[str, str]:
    """Initial form values for editing a record."""
    return {
        "first_name": record.first_name,
        "last_name": record.last_name,
        "gender": record.gender.value,
        "date_of_birth": dob_input_value(record),
        "bio": record.bio or "",
    }


class InspectorPanel(Vertical):
    """Shows the selected user read-only, or the edit form during a session.

    The panel holds no state of its own beyond which record the form was
    last filled from; the app passes everything it needs to ``show``.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._form_record_id: int | None = None

    def compose(self) -> ComposeResult:
        from controller.field_mappings import EDITABLE_FIELDS, ID_FIELD

        with Horizontal(classes="inspector-header"):
            yield Label("User Info", id=ids.INSPECTOR_TITLE)
            yield Button("✕", id=ids.INSPECTOR_CLOSE_BTN, variant="default")
        with Vertical(id=ids.INSPECTOR_VIEW):
            for field in [ID_FIELD, *EDITABLE_FIELDS]:
                with Horizontal(classes="view-row"):
                    yield Label(field.label, classes="form-label")
                    yield Static("", id=field.widget_id(ids.VIEW_PREFIX), classes="view-value")
        with Vertical(id=ids.INSPECTOR_FORM, classes="hidden"):
            yield Static("", id=f"{ids.EDIT_FORM}-{ids.FIELD_ID}", classes="view-value")
            yield from compose_form(ids.EDIT_FORM, EDITABLE_FIELDS, {})
        with Horizontal(id=ids.INSPECTOR_BUTTONS):
            yield Button("Edit", id=ids.EDIT_BTN, variant="primary")
            yield Button("Delete", id=ids.DELETE_BTN, variant="error")
            yield Button("Save", id=ids.SAVE_BTN, variant="success", classes="hidden")

    def show(self, record: UserRecord | None, editing: bool, can_mutate: bool) -> None:
        """Render the panel for the given record and mode."""
        set_hidden(self, record is None)
        if record is None:
            self._form_record_id = None
            return

        self._show_view(record)
        view = self.query_one(css(ids.INSPECTOR_VIEW))
        form = self.query_one(css(ids.INSPECTOR_FORM))
        set_hidden(view, editing)
        set_hidden(form, not editing)

        if editing and self._form_record_id != record.id:
            self._fill_form(record)
        elif not editing:
            self._form_record_id = None

        edit_btn = self.query_one(css(ids.EDIT_BTN), Button)
        edit_btn.label = "Revert" if editing else "Edit"
        edit_btn.disabled = not editing and not can_mutate
        delete_btn = self.query_one(css(ids.DELETE_BTN), Button)
        set_hidden(delete_btn, editing)
        delete_btn.disabled = not can_mutate
        save_btn = self.query_one(css(ids.SAVE_BTN), Button)
        set_hidden(save_btn, not editing)
        save_btn.disabled = not can_mutate

    def _show_view(self, record: UserRecord) -> None:
        values = {
            ids.FIELD_ID: str(record.id),
            ids.FIELD_FIRST_NAME: record.first_name,
            ids.FIELD_LAST_NAME: record.last_name,
            ids.FIELD_GENDER: record.gender.value,
            ids.FIELD_DOB: format_dob_full(record),
            ids.FIELD_BIO: record.bio or "",
        }
        for suffix, text in values.items():
            self.query_one(f"#{ids.VIEW_PREFIX}-{suffix}", Static).update(text)

    def _fill_form(self, record: UserRecord) -> None:
        """Load a record into the edit inputs without echoing Changed events."""
        from controller.field_mappings import EDITABLE_FIELDS

        self._form_record_id = record.id
        self.query_one(f"#{ids.EDIT_FORM}-{ids.FIELD_ID}", Static).update(
            f"Student ID: {record.id}"
        )
        with self.prevent(Input.Changed, Select.Changed):
            write_form(self, ids.EDIT_FORM, EDITABLE_FIELDS, record_to_ui(record))
