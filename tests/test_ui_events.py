"""Tests for UI event handling - verifies buttons, rows and dialogs reach the controller.

These tests catch wiring problems where event decorators don't register properly.
"""

import pytest

from textual.widgets import Button, Input, Label, Static

from app import UserDeskTUI
from conftest import FakeUsersClient
from model import FetchStatus
from ui import ConfirmDeleteModal, CreateUserModal, InspectorPanel, StatusIndicator, UsersTable
from ui.ids import css
import ui.ids as ids


async def wait(app, pilot):
    """Let workers finish and the screen catch up."""
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


def text_of(widget) -> str:
    return str(widget.render())


@pytest.fixture
def app(ada, alan):
    return UserDeskTUI(FakeUsersClient([ada, alan]))


async def select_row(app, pilot, row):
    table = app.query_one(css(ids.USERS_TABLE), UsersTable)
    table.move_cursor(row=row)
    table.action_select_cursor()
    await wait(app, pilot)


class TestListEvents:
    """Test the list and the header."""

    @pytest.mark.asyncio
    async def test_mount_fetches_users(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            table = app.query_one(css(ids.USERS_TABLE), UsersTable)
            assert table.row_count == 2
            indicator = app.query_one(css(ids.STATUS_INDICATOR), StatusIndicator)
            assert indicator.status is FetchStatus.READY

    @pytest.mark.asyncio
    async def test_failed_fetch_shows_caption(self, app):
        app.controller.client.fail("list_users", "connection refused")
        async with app.run_test() as pilot:
            await wait(app, pilot)
            caption = app.query_one(css(ids.TABLE_CAPTION), Label)
            assert text_of(caption) == "Error: connection refused"
            assert not app.query_one(css(ids.REFRESH_BTN), Button).disabled

    @pytest.mark.asyncio
    async def test_refresh_button_refetches(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            app.query_one(css(ids.REFRESH_BTN), Button).press()
            await wait(app, pilot)
            assert app.controller.client.calls == ["list_users", "list_users"]

    @pytest.mark.asyncio
    async def test_row_select_opens_inspector(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            inspector = app.query_one(css(ids.INSPECTOR), InspectorPanel)
            assert inspector.has_class("hidden")

            await select_row(app, pilot, 1)
            assert app.controller.selection.selected_id == 2
            assert not inspector.has_class("hidden")
            first_name = app.query_one(f"#{ids.VIEW_PREFIX}-{ids.FIELD_FIRST_NAME}", Static)
            assert text_of(first_name) == "Alan"

    @pytest.mark.asyncio
    async def test_escape_closes_inspector(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 0)
            await pilot.press("escape")
            await pilot.pause()
            assert app.controller.selection.current() is None
            assert app.query_one(css(ids.INSPECTOR)).has_class("hidden")


class TestInspectorEvents:
    """Test edit, save and delete from the inspector."""

    @pytest.mark.asyncio
    async def test_edit_and_save(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 0)

            app.query_one(css(ids.EDIT_BTN), Button).press()
            await pilot.pause()
            assert app.controller.edit.is_open
            last_name = app.query_one(f"#{ids.EDIT_FORM}-{ids.FIELD_LAST_NAME}", Input)
            assert last_name.value == "Lovelace"

            last_name.value = "King"
            await pilot.pause()
            assert app.controller.displayed_record.last_name == "King"

            app.query_one(css(ids.SAVE_BTN), Button).press()
            await wait(app, pilot)
            assert app.controller.client.records[0].last_name == "King"
            assert not app.controller.edit.is_open
            status_bar = app.query_one(css(ids.STATUS_BAR), Static)
            assert text_of(status_bar) == "Saving Successful"

    @pytest.mark.asyncio
    async def test_revert_discards_edits(self, app, ada):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 0)

            app.query_one(css(ids.EDIT_BTN), Button).press()
            await pilot.pause()
            app.query_one(f"#{ids.EDIT_FORM}-{ids.FIELD_FIRST_NAME}", Input).value = "Augusta"
            await pilot.pause()

            app.query_one(css(ids.EDIT_BTN), Button).press()
            await pilot.pause()
            assert not app.controller.edit.is_open
            assert app.controller.displayed_record == ada
            assert "update_user" not in app.controller.client.calls

    @pytest.mark.asyncio
    async def test_save_with_blank_name_refused(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 0)
            app.query_one(css(ids.EDIT_BTN), Button).press()
            await pilot.pause()
            app.query_one(f"#{ids.EDIT_FORM}-{ids.FIELD_FIRST_NAME}", Input).value = ""
            await pilot.pause()

            app.query_one(css(ids.SAVE_BTN), Button).press()
            await wait(app, pilot)
            assert app.controller.edit.is_open
            assert "update_user" not in app.controller.client.calls
            assert "First name is required" in text_of(app.query_one(css(ids.STATUS_BAR), Static))

    @pytest.mark.asyncio
    async def test_delete_confirmed(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 1)

            app.query_one(css(ids.DELETE_BTN), Button).press()
            await pilot.pause()
            assert isinstance(app.screen, ConfirmDeleteModal)

            app.screen.query_one(css(ids.CONFIRM_DELETE_BTN), Button).press()
            await wait(app, pilot)
            assert [r.id for r in app.controller.client.records] == [1]
            assert app.controller.selection.current() is None
            assert app.query_one(css(ids.USERS_TABLE), UsersTable).row_count == 1

    @pytest.mark.asyncio
    async def test_delete_cancelled(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            await select_row(app, pilot, 1)

            app.query_one(css(ids.DELETE_BTN), Button).press()
            await pilot.pause()
            app.screen.query_one(css(ids.CANCEL_DELETE_BTN), Button).press()
            await wait(app, pilot)
            assert "delete_user" not in app.controller.client.calls
            assert app.controller.selection.selected_id == 2
            assert app.controller.confirmation.target is None


class TestCreateEvents:
    """Test the create dialog."""

    def fill(self, screen, **values):
        for suffix, value in values.items():
            screen.query_one(f"#{ids.CREATE_FORM}-{suffix}", Input).value = value

    @pytest.mark.asyncio
    async def test_create_user(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            app.query_one(css(ids.CREATE_BTN), Button).press()
            await pilot.pause()
            assert isinstance(app.screen, CreateUserModal)

            self.fill(app.screen, **{
                ids.FIELD_ID: "3",
                ids.FIELD_FIRST_NAME: "Grace",
                ids.FIELD_LAST_NAME: "Hopper",
            })
            app.screen.query_one(css(ids.CREATE_CONFIRM_BTN), Button).press()
            await wait(app, pilot)

            assert 3 in app.controller.cache
            assert app.controller.cache.get(3).date_of_birth == "2024-02-10"
            status_bar = app.query_one(css(ids.STATUS_BAR), Static)
            assert text_of(status_bar) == "User Creation Successful"

    @pytest.mark.asyncio
    async def test_invalid_form_stays_open(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            app.query_one(css(ids.CREATE_BTN), Button).press()
            await pilot.pause()

            app.screen.query_one(css(ids.CREATE_CONFIRM_BTN), Button).press()
            await pilot.pause()
            assert isinstance(app.screen, CreateUserModal)
            error = app.screen.query_one(css(ids.CREATE_ERROR), Static)
            assert "First name is required" in text_of(error)
            assert "create_user" not in app.controller.client.calls

    @pytest.mark.asyncio
    async def test_duplicate_id_reports_failure(self, app):
        async with app.run_test() as pilot:
            await wait(app, pilot)
            app.query_one(css(ids.CREATE_BTN), Button).press()
            await pilot.pause()
            self.fill(app.screen, **{
                ids.FIELD_ID: "1",
                ids.FIELD_FIRST_NAME: "Ada",
                ids.FIELD_LAST_NAME: "Byron",
            })
            app.screen.query_one(css(ids.CREATE_CONFIRM_BTN), Button).press()
            await wait(app, pilot)

            status_bar = app.query_one(css(ids.STATUS_BAR), Static)
            assert text_of(status_bar) == "User Creation Failure"
            assert app.controller.cache.get(1).last_name == "Lovelace"
