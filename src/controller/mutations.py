"""MutationCoordinator: create/update/delete against the record store."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from controller.notifications import NotificationBus, Operation
from errors import MutationFailure, PreconditionViolation, RemoteError

if TYPE_CHECKING:
    from api import UsersClient
    from model import StatusTracker, UserRecord
    from state import SelectionStore

log = logging.getLogger(__name__)


class MutationResult(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"  # another mutation was still in flight, or torn down


class MutationCoordinator:
    """Issues mutations behind a single global busy gate.

    While any mutation is in flight, further create/update/delete calls are
    rejected rather than queued. Refreshes are not gated. A successful
    mutation never patches the list locally; it triggers a full refresh.
    """

    def __init__(
        self,
        client: UsersClient,
        bus: NotificationBus,
        status: StatusTracker,
        selection: SelectionStore,
        refresh: Callable[[], Awaitable[Any]],
        clear_selection: Callable[[], None],
        on_change: Callable[[], None] = lambda: None,
        is_closed: Callable[[], bool] = lambda: False,
    ) -> None:
        """Initialize the coordinator.

        Args:
            client: Record store client
            bus: Where started/succeeded/failed notifications go
            status: Fetch status tracker, marked FAILED when a mutation fails
            selection: Current selection, checked by update()
            refresh: Coroutine function reloading the list after a success
            clear_selection: Callback clearing the selection after a delete
            on_change: Callback when busy state changes (to re-render)
            is_closed: Returns True once the owner has been torn down
        """
        self._client = client
        self._bus = bus
        self._status = status
        self._selection = selection
        self._refresh = refresh
        self._clear_selection = clear_selection
        self._on_change = on_change
        self._is_closed = is_closed
        self._in_flight: Operation | None = None

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    @property
    def in_flight(self) -> Operation | None:
        return self._in_flight

    async def create(self, record: UserRecord) -> MutationResult:
        """Create a record with its caller-chosen id.

        Id uniqueness is left to the server.
        """
        return await self._run(Operation.CREATE, lambda: self._client.create_user(record))

    async def update(self, record: UserRecord) -> MutationResult:
        current = self._selection.current()
        if current is None:
            raise PreconditionViolation("update() requires a selected user")
        if current.id != record.id:
            raise PreconditionViolation(
                f"update() for user {record.id} but user {current.id} is selected"
            )
        return await self._run(Operation.UPDATE, lambda: self._client.update_user(record))

    async def delete(self, record_id: int) -> MutationResult:
        def clear_if_selected() -> None:
            # The operator may have moved on to another user meanwhile
            if self._selection.selected_id == record_id:
                self._clear_selection()

        return await self._run(
            Operation.DELETE,
            lambda: self._client.delete_user(record_id),
            after_success=clear_if_selected,
        )

    async def _run(
        self,
        operation: Operation,
        call: Callable[[], Awaitable[Any]],
        after_success: Callable[[], None] | None = None,
    ) -> MutationResult:
        if self._is_closed():
            log.debug(f"{operation.label} requested after teardown; ignoring")
            return MutationResult.REJECTED
        if self._in_flight is not None:
            log.info(f"{operation.label} rejected: {self._in_flight.label} still in flight")
            return MutationResult.REJECTED

        self._in_flight = operation
        attempt = self._bus.start(operation)
        log.info(f"{operation.label} dispatched (attempt {attempt.attempt_id})")
        self._on_change()

        try:
            await call()
        except RemoteError as exc:
            self._in_flight = None
            if self._is_closed():
                log.debug(f"{operation.label} failed after teardown; discarding")
                return MutationResult.FAILED
            failure = MutationFailure.wrap(exc)
            log.warning(f"{operation.label} failed: {failure.detail}")
            attempt.fail(failure.detail)
            self._status.mark_failed(failure.detail)
            self._on_change()
            return MutationResult.FAILED
        except BaseException as exc:
            # Cancellation or a bug: still settle the attempt, then propagate
            self._in_flight = None
            if not self._is_closed():
                attempt.fail(str(exc) or type(exc).__name__)
                self._on_change()
            raise

        self._in_flight = None
        if self._is_closed():
            log.debug(f"{operation.label} succeeded after teardown; discarding")
            return MutationResult.SUCCEEDED

        log.info(f"{operation.label} succeeded")
        attempt.succeed()
        if after_success is not None:
            after_success()
        self._on_change()
        await self._refresh()
        return MutationResult.SUCCEEDED
