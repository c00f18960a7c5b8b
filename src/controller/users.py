"""User browser event handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from textual.widgets import DataTable, Input, Select

from controller.field_mappings import EDITABLE_FIELDS, parse_field
from controller.mutations import MutationResult
from controller.validators import validate_bio
from model import Gender, UserRecord
import ui.ids as ids

if TYPE_CHECKING:
    from controller.sync import SyncController

log = logging.getLogger(__name__)

_EDIT_WIDGET_FIELDS = {field.widget_id(ids.EDIT_FORM): field for field in EDITABLE_FIELDS}


def check_edited_record(record: UserRecord) -> tuple[dict[str, Any], list[str]]:
    """Validate an edit buffer before it is saved.

    Returns:
        (normalized field values that differ from the buffer, error messages)
    """
    changes: dict[str, Any] = {}
    errors: list[str] = []
    for field in EDITABLE_FIELDS:
        current = getattr(record, field.record_field)
        value, error = parse_field(field, field.to_ui(current))
        if error:
            errors.append(error)
        elif value != current:
            changes[field.record_field] = value
    return changes, errors


class UserEventsMixin:
    """Mixin for list, inspector and dialog event handlers."""

    # Expected from App class
    controller: SyncController
    push_screen: Callable
    run_worker: Callable
    _set_status: Callable

    # =========================================================================
    # Header
    # =========================================================================

    def action_refresh(self) -> None:
        """Reload the list unless a fetch is already outstanding."""
        if not self.controller.can_refresh:
            return
        self.run_worker(self.controller.refresh(), group="refresh")

    def action_create(self) -> None:
        """Open the create dialog."""
        from ui.modals import CreateUserModal

        if not self.controller.can_mutate:
            self._set_status("Another change is still being saved")
            return
        self.push_screen(CreateUserModal(), self._on_create_result)

    def _on_create_result(self, record: UserRecord | None) -> None:
        if record is None:
            return
        self._run_mutation(self.controller.create(record))

    # =========================================================================
    # List
    # =========================================================================

    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        """Select the user behind a table row."""
        key = event.row_key.value
        if key is None:
            return
        self.controller.select_id(int(key))

    # =========================================================================
    # Inspector
    # =========================================================================

    def action_close_inspector(self) -> None:
        if self.controller.selection.current() is not None:
            self.controller.clear_selection()

    def on_edit_toggle_pressed(self) -> None:
        """Edit when viewing, revert when editing."""
        if self.controller.edit.is_open:
            self.controller.revert_edit()
        elif self.controller.can_mutate:
            self.controller.begin_edit()

    def on_edit_input_changed(self, event: Input.Changed) -> None:
        """Push one keystroke into the edit buffer."""
        field = _EDIT_WIDGET_FIELDS.get(event.input.id or "")
        if field is None or not self.controller.edit.is_open:
            return
        value = validate_bio(event.value) if field.record_field == "bio" else event.value
        self.controller.set_field(field.record_field, value)

    def on_edit_gender_changed(self, event: Select.Changed) -> None:
        if not self.controller.edit.is_open or not isinstance(event.value, str):
            return
        self.controller.set_field("gender", Gender(event.value))

    def on_save_pressed(self) -> None:
        """Validate the buffer and save it."""
        if not self.controller.edit.is_open:
            return
        changes, errors = check_edited_record(self.controller.edit.contents())
        if errors:
            self._set_status("; ".join(errors))
            return
        for name, value in changes.items():
            self.controller.set_field(name, value)
        self._run_mutation(self.controller.save_edit())

    def on_delete_pressed(self) -> None:
        """Ask for confirmation before deleting the selected user."""
        from ui.modals import ConfirmDeleteModal

        record = self.controller.selection.current()
        if record is None or not self.controller.can_mutate:
            return
        self.controller.request_delete()
        self.push_screen(ConfirmDeleteModal(record), self._on_delete_result)

    def _on_delete_result(self, confirmed: bool | None) -> None:
        if not confirmed:
            self.controller.cancel_delete()
        elif self.controller.confirmation.target is None:
            # A refresh removed the user while the dialog was open
            self._set_status("That user no longer exists")
        else:
            self._run_mutation(self.controller.confirm_delete())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _run_mutation(self, mutation) -> None:
        async def run() -> None:
            result = await mutation
            if result is MutationResult.REJECTED:
                self._set_status("Another change is still being saved")

        self.run_worker(run(), group="mutations")
