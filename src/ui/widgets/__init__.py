"""Custom Textual widgets for userdesk.

This package contains all custom widgets organized by area.
"""

from ui.widgets.form import GENDER_OPTIONS, compose_form, read_form, write_form
from ui.widgets.inspector import InspectorPanel, record_to_ui
from ui.widgets.status import StatusIndicator
from ui.widgets.users_table import UsersTable

__all__ = [
    # Form helpers
    "GENDER_OPTIONS",
    "compose_form",
    "read_form",
    "write_form",
    # Inspector
    "InspectorPanel",
    "record_to_ui",
    # Header
    "StatusIndicator",
    # List
    "UsersTable",
]
