"""Main TUI application for userdesk."""

import logging
from pathlib import Path
from typing import TypeVar

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Button, DataTable, Input, Label, Select, Static

from api import UsersClient
from constants import USERDESK_VERSION
from controller import Notification, NotificationKind, SyncController, UserEventsMixin
from settings import get_state_dir
from ui import InspectorPanel, StatusIndicator, UsersTable
from ui.ids import css
import ui.ids as ids


# Set up logging to XDG state directory
def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory layout."""
    log_dir = get_state_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "userdesk.log"

logging.basicConfig(
    filename=str(_get_log_path()),
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()

W = TypeVar("W", bound=Widget)


class UserDeskTUI(UserEventsMixin, App):
    """TUI for browsing and editing users of a record store."""

    TITLE = "User Desk"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("n", "create", "Create", show=True),
        Binding("escape", "close_inspector", "Close", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, client: UsersClient, version: str = USERDESK_VERSION) -> None:
        super().__init__()
        self.version = version
        self.controller = SyncController(client)
        self.controller.add_listener(self._render_state)
        self.controller.bus.subscribe(self._on_notification)
        self._shown_attempt: int | None = None

    def compose(self) -> ComposeResult:
        log.info(f"compose() called for {self.controller.client.base_url}")

        yield Horizontal(
            Label(f"userdesk {self.version} - {self.controller.client.base_url}", id=ids.HEADER_TITLE),
            Button("Create", id=ids.CREATE_BTN, variant="primary"),
            Button("Refresh", id=ids.REFRESH_BTN, variant="default"),
            StatusIndicator(id=ids.STATUS_INDICATOR),
            id=ids.HEADER_CONTAINER,
        )
        with Vertical(id=ids.MAIN_CONTENT):
            yield Label("", id=ids.TABLE_CAPTION)
            yield UsersTable(id=ids.USERS_TABLE)
            yield InspectorPanel(id=ids.INSPECTOR, classes="hidden")
        yield Horizontal(
            Static("", id=ids.STATUS_BAR),
            id=ids.FOOTER_BAR,
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def _main_query(self, selector: str, expect_type: type[W]) -> W:
        """Query the base screen, which stays underneath any open dialog."""
        if not self.screen_stack:
            raise NoMatches(selector)
        return self.screen_stack[0].query_one(selector, expect_type)

    def _render_state(self) -> None:
        """Re-render everything derived from the controller."""
        controller = self.controller
        try:
            self._main_query(css(ids.STATUS_INDICATOR), StatusIndicator).show(controller.status.status)
            self._main_query(css(ids.TABLE_CAPTION), Label).update(controller.status.caption)
            self._main_query(css(ids.REFRESH_BTN), Button).disabled = not controller.can_refresh
            self._main_query(css(ids.CREATE_BTN), Button).disabled = not controller.can_mutate
            self._main_query(css(ids.USERS_TABLE), UsersTable).show_records(controller.cache.all())
            self._main_query(css(ids.INSPECTOR), InspectorPanel).show(
                controller.displayed_record,
                editing=controller.edit.is_open,
                can_mutate=controller.can_mutate,
            )
        except NoMatches:
            # Not mounted yet, or already torn down
            pass

    def _set_status(self, message: str) -> None:
        """Set status bar message."""
        try:
            status = self._main_query(css(ids.STATUS_BAR), Static)
            status.update(message)
        except NoMatches:
            pass

    def _on_notification(self, notification: Notification) -> None:
        """Show progress in the status bar; terminal events replace it and toast."""
        if notification.kind is NotificationKind.STARTED:
            self._shown_attempt = notification.attempt_id
            self._set_status(f"{notification.message}...")
            return

        if notification.supersedes == self._shown_attempt:
            self._shown_attempt = None
            self._set_status(notification.message)
        if notification.kind is NotificationKind.FAILED:
            self.notify(
                notification.detail or "",
                title=notification.message,
                severity="error",
            )
        else:
            self.notify(notification.message, title=notification.label)

    # =========================================================================
    # Mixin Handler Forwarding
    # =========================================================================
    # Textual's @on decorator only registers handlers defined on the class itself,
    # not on mixins. These forwarding handlers ensure events are routed to mixins.

    @on(Button.Pressed, css(ids.CREATE_BTN))
    def _on_create_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_create()

    @on(Button.Pressed, css(ids.REFRESH_BTN))
    def _on_refresh_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_refresh()

    @on(Button.Pressed, css(ids.INSPECTOR_CLOSE_BTN))
    def _on_close_inspector_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_close_inspector()

    @on(Button.Pressed, css(ids.EDIT_BTN))
    def _on_edit_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.on_edit_toggle_pressed()

    @on(Button.Pressed, css(ids.SAVE_BTN))
    def _on_save_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.on_save_pressed()

    @on(Button.Pressed, css(ids.DELETE_BTN))
    def _on_delete_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.on_delete_pressed()

    @on(Input.Changed)
    def _on_input_changed(self, event: Input.Changed) -> None:
        """Forward to mixin handler."""
        self.on_edit_input_changed(event)

    @on(Select.Changed, css(f"{ids.EDIT_FORM}-{ids.FIELD_GENDER}"))
    def _on_gender_changed(self, event: Select.Changed) -> None:
        """Forward to mixin handler."""
        self.on_edit_gender_changed(event)

    @on(DataTable.RowSelected, css(ids.USERS_TABLE))
    def _on_row_selected(self, event: DataTable.RowSelected) -> None:
        """Forward to mixin handler."""
        self.on_row_selected(event)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self._render_state()
        self.query_one(css(ids.USERS_TABLE), UsersTable).focus()
        self.action_refresh()

    async def on_unmount(self) -> None:
        await self.controller.close()
