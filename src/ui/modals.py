"""Modal dialogs for creating and deleting users."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from constants import NEW_USER_DEFAULTS
from model import UserRecord
from ui.ids import css
from ui.widgets.form import compose_form, read_form
import ui.ids as ids


def _default_form_values() -> dict[str, str]:
    return {
        name: "" if value is None else str(value)
        for name, value in NEW_USER_DEFAULTS.items()
    }


def build_record(raw: dict[str, str]) -> tuple[UserRecord | None, list[str]]:
    """Validate raw create-form values.

    Returns:
        (record, []) when valid, otherwise (None, error messages)
    """
    from controller.field_mappings import CREATE_FIELDS, parse_field

    values = {}
    errors = []
    for field in CREATE_FIELDS:
        value, error = parse_field(field, raw.get(field.record_field, ""))
        if error:
            errors.append(error)
        else:
            values[field.record_field] = value
    if errors:
        return None, errors
    return UserRecord(**values), []


class ConfirmDeleteModal(ModalScreen[bool]):
    """Asks before deleting a user; dismisses with True to delete."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, record: UserRecord) -> None:
        super().__init__()
        self.record = record

    def compose(self) -> ComposeResult:
        with Vertical(id=ids.CONFIRM_DELETE_MODAL):
            yield Label("Are you absolutely sure?", id=ids.MODAL_TITLE)
            yield Static(
                f"This action cannot be undone. This will permanently delete "
                f"user {self.record}."
            )
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_DELETE_BTN, variant="default")
                yield Button("Delete", id=ids.CONFIRM_DELETE_BTN, variant="error")

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CANCEL_DELETE_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CONFIRM_DELETE_BTN))
    def on_confirm(self, event: Button.Pressed) -> None:
        self.dismiss(True)


class CreateUserModal(ModalScreen[UserRecord | None]):
    """Form for a new user. Dismisses with the record, or None on cancel."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        from controller.field_mappings import CREATE_FIELDS

        with Vertical(id=ids.CREATE_MODAL):
            yield Label("Create User", id=ids.MODAL_TITLE)
            yield Static("Enter the following details.", classes="modal-hint")
            with VerticalScroll():
                yield from compose_form(ids.CREATE_FORM, CREATE_FIELDS, _default_form_values())
            yield Static("", id=ids.CREATE_ERROR, classes="form-error")
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CREATE_CANCEL_BTN, variant="default")
                yield Button("Create", id=ids.CREATE_CONFIRM_BTN, variant="primary")

    def on_mount(self) -> None:
        self.query_one(css(f"{ids.CREATE_FORM}-{ids.FIELD_ID}"), Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CREATE_CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CREATE_CONFIRM_BTN))
    def on_create(self, event: Button.Pressed) -> None:
        self._submit()

    @on(Input.Submitted)
    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def _submit(self) -> None:
        from controller.field_mappings import CREATE_FIELDS

        record, errors = build_record(read_form(self, ids.CREATE_FORM, CREATE_FIELDS))
        if record is None:
            self.query_one(css(ids.CREATE_ERROR), Static).update("\n".join(errors))
            return
        self.dismiss(record)
