"""Tests for MutationCoordinator used on its own."""

import asyncio

import pytest

from conftest import FakeUsersClient, settle
from controller import MutationCoordinator, MutationResult, NotificationKind
from errors import PreconditionViolation
from model import FetchStatus, StatusTracker
from state import SelectionStore


@pytest.fixture
def harness(ada, alan, bus):
    """A coordinator wired to recording callbacks instead of a controller."""

    class Harness:
        pass

    h = Harness()
    h.client = FakeUsersClient([ada, alan])
    h.status = StatusTracker()
    h.selection = SelectionStore()
    h.refreshes = 0
    h.cleared = 0
    h.changes = 0

    async def refresh():
        h.refreshes += 1

    def clear_selection():
        h.cleared += 1

    def on_change():
        h.changes += 1

    h.coordinator = MutationCoordinator(
        h.client, bus, h.status, h.selection,
        refresh=refresh, clear_selection=clear_selection, on_change=on_change,
    )
    return h


class TestMutationCoordinator:
    """Test MutationCoordinator."""

    @pytest.mark.asyncio
    async def test_update_requires_selection(self, harness, ada):
        with pytest.raises(PreconditionViolation):
            await harness.coordinator.update(ada)
        assert harness.client.calls == []

    @pytest.mark.asyncio
    async def test_update_requires_matching_selection(self, harness, ada, alan):
        harness.selection.select(alan)
        with pytest.raises(PreconditionViolation):
            await harness.coordinator.update(ada)

    @pytest.mark.asyncio
    async def test_success_refreshes(self, harness, ada):
        harness.selection.select(ada)
        result = await harness.coordinator.update(ada.with_field("bio", None))
        assert result is MutationResult.SUCCEEDED
        assert harness.refreshes == 1
        assert harness.cleared == 0

    @pytest.mark.asyncio
    async def test_delete_clears_selection(self, harness, alan):
        harness.selection.select(alan)
        assert await harness.coordinator.delete(2) is MutationResult.SUCCEEDED
        assert harness.cleared == 1
        assert harness.refreshes == 1

    @pytest.mark.asyncio
    async def test_delete_keeps_other_selection(self, harness, ada):
        harness.selection.select(ada)
        assert await harness.coordinator.delete(2) is MutationResult.SUCCEEDED
        assert harness.cleared == 0
        assert harness.refreshes == 1

    @pytest.mark.asyncio
    async def test_failure_marks_status_and_skips_refresh(self, harness, notifications):
        harness.client.fail("delete_user", "not found", status_code=404)
        assert await harness.coordinator.delete(9) is MutationResult.FAILED
        assert harness.refreshes == 0
        assert harness.cleared == 0
        assert harness.status.status is FetchStatus.FAILED
        assert notifications[-1].kind is NotificationKind.FAILED
        assert notifications[-1].detail == "not found"

    @pytest.mark.asyncio
    async def test_busy_flag(self, harness, grace):
        harness.client.hold("create_user")
        task = asyncio.create_task(harness.coordinator.create(grace))
        await settle()
        assert harness.coordinator.busy
        assert await harness.coordinator.delete(1) is MutationResult.REJECTED
        harness.client.release("create_user")
        await task
        assert not harness.coordinator.busy

    @pytest.mark.asyncio
    async def test_unexpected_error_settles_attempt(self, harness, grace, notifications):
        harness.client.hold("create_user")
        task = asyncio.create_task(harness.coordinator.create(grace))
        await settle()
        harness.client.release("create_user", outcome=RuntimeError("bug"))
        with pytest.raises(RuntimeError):
            await task
        assert not harness.coordinator.busy
        assert notifications[-1].kind is NotificationKind.FAILED
        assert notifications[-1].detail == "bug"
