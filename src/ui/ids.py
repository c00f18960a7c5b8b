"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"

# Container IDs
HEADER_CONTAINER = "header-container"
HEADER_TITLE = "header-title"
MAIN_CONTENT = "main-content"
TABLE_CONTAINER = "table-container"
FOOTER_BAR = "footer-bar"
STATUS_BAR = "status-bar"

# Header buttons and status
CREATE_BTN = "create-btn"
REFRESH_BTN = "refresh-btn"
STATUS_INDICATOR = "status-indicator"

# User table
USERS_TABLE = "users-table"
TABLE_CAPTION = "table-caption"

# Inspector
INSPECTOR = "inspector"
INSPECTOR_TITLE = "inspector-title"
INSPECTOR_CLOSE_BTN = "inspector-close-btn"
INSPECTOR_VIEW = "inspector-view"
INSPECTOR_FORM = "inspector-form"
INSPECTOR_BUTTONS = "inspector-buttons"
EDIT_BTN = "edit-btn"
SAVE_BTN = "save-btn"
DELETE_BTN = "delete-btn"

# Form field suffixes, combined with a form prefix (see FormField.widget_id)
FIELD_ID = "id"
FIELD_FIRST_NAME = "first-name"
FIELD_LAST_NAME = "last-name"
FIELD_GENDER = "gender"
FIELD_DOB = "dob"
FIELD_BIO = "bio"

# Form prefixes
EDIT_FORM = "edit"
CREATE_FORM = "create"
VIEW_PREFIX = "view"

# Modals
CREATE_MODAL = "create-user-modal"
CREATE_CONFIRM_BTN = "create-confirm-btn"
CREATE_CANCEL_BTN = "create-cancel-btn"
CREATE_ERROR = "create-error"
CONFIRM_DELETE_MODAL = "confirm-delete-modal"
CONFIRM_DELETE_BTN = "confirm-delete-btn"
CANCEL_DELETE_BTN = "cancel-delete-btn"
MODAL_TITLE = "modal-title"
MODAL_BUTTONS = "modal-buttons"
