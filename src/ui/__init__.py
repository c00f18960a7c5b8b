"""UI module containing widgets, modals and styles."""

from ui.widgets import (
    InspectorPanel,
    StatusIndicator,
    UsersTable,
    compose_form,
    read_form,
    record_to_ui,
    write_form,
)
from ui.modals import ConfirmDeleteModal, CreateUserModal, build_record
from ui.helpers import format_dob_date, format_dob_full, set_hidden
from ui import ids

__all__ = [
    # Widgets
    "InspectorPanel",
    "StatusIndicator",
    "UsersTable",
    "compose_form",
    "read_form",
    "record_to_ui",
    "write_form",
    # Modals
    "ConfirmDeleteModal",
    "CreateUserModal",
    "build_record",
    # Helpers
    "format_dob_date",
    "format_dob_full",
    "set_hidden",
]
