"""SyncController: keeps list, selection, edit buffer and status consistent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from controller.mutations import MutationCoordinator, MutationResult
from controller.notifications import NotificationBus
from errors import FetchFailure, PreconditionViolation, RemoteError
from model import StatusTracker, UserRecord
from state import DeleteConfirmation, EditBuffer, ListCache, SelectionStore

if TYPE_CHECKING:
    from api import UsersClient

log = logging.getLogger(__name__)


class SyncController:
    """Orchestrates the user list, selection, edit session and network status.

    The interface layer calls only the methods on this class. They cover:

    1. **Fetch lifecycle** (refresh): reload the whole list. Every call gets a
       sequence number; a response older than the last committed one is
       dropped, so only the most recently resolved newer response wins.

    2. **Selection** (select, select_id, clear_selection): at most one record
       under inspection. After each successful refresh the selection is
       reconciled against the new snapshot.

    3. **Editing** (begin_edit, set_field, revert_edit, save_edit): a working
       copy of the selection. Save pushes it into the selection right away and
       hands it to MutationCoordinator.update().

    4. **Deletion** (request_delete, cancel_delete, confirm_delete): a
       confirmation step in front of MutationCoordinator.delete().

    5. **Creation** (create).

    Listeners registered with add_listener() are called after every state
    change so the interface can re-render.

    Example usage:
        controller = SyncController(UsersClient("http://localhost:8000"))
        controller.add_listener(render)
        await controller.refresh()
        controller.select_id(1)
        controller.begin_edit()
        controller.set_field("last_name", "Lee")
        await controller.save_edit()
    """

    def __init__(self, client: UsersClient, bus: NotificationBus | None = None) -> None:
        self.client = client
        self.bus = bus or NotificationBus()
        self.status = StatusTracker()
        self.cache = ListCache()
        self.selection = SelectionStore()
        self.edit = EditBuffer()
        self.confirmation = DeleteConfirmation()
        self.mutations = MutationCoordinator(
            client,
            self.bus,
            self.status,
            self.selection,
            refresh=self.refresh,
            clear_selection=self.clear_selection,
            on_change=self._changed,
            is_closed=lambda: self._closed,
        )
        self._listeners: list[Callable[[], None]] = []
        self._issued = 0
        self._committed = 0
        self._closed = False

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _changed(self) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            listener()

    # =========================================================================
    # Derived state for rendering
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def displayed_record(self) -> UserRecord | None:
        """What the inspector shows: the buffer while editing, else the selection."""
        if self.edit.is_open:
            return self.edit.contents()
        return self.selection.current()

    @property
    def can_refresh(self) -> bool:
        return not self.status.is_busy

    @property
    def can_mutate(self) -> bool:
        return not self.mutations.busy

    # =========================================================================
    # Fetch lifecycle
    # =========================================================================

    async def refresh(self) -> bool:
        """Reload the list from the record store.

        Returns:
            True if this call's response was committed, False if it was
            discarded as stale or arrived after teardown.
        """
        if self._closed:
            return False
        self._issued += 1
        seq = self._issued
        self.status.mark_busy()
        log.debug(f"Refresh #{seq} issued")
        self._changed()

        try:
            records = await self.client.list_users()
        except RemoteError as exc:
            return self._commit_fetch(seq, failure=FetchFailure.wrap(exc))
        except BaseException as exc:
            # Never leave the status stuck at BUSY, even on a bug or cancellation
            self._commit_fetch(seq, failure=FetchFailure(str(exc) or type(exc).__name__))
            raise
        return self._commit_fetch(seq, records=records)

    def _commit_fetch(
        self,
        seq: int,
        records: list[UserRecord] | None = None,
        failure: FetchFailure | None = None,
    ) -> bool:
        if self._closed:
            log.debug(f"Refresh #{seq} resolved after teardown; discarding")
            return False
        if seq < self._committed:
            log.info(f"Refresh #{seq} is stale (#{self._committed} already committed); discarding")
            return False
        self._committed = seq
        latest = seq == self._issued

        if failure is None:
            try:
                self.cache.replace(records or [])
            except ValueError as e:
                failure = FetchFailure(str(e))

        if failure is None:
            log.info(f"Refresh #{seq} committed {len(self.cache)} user(s)")
            self._reconcile_selection()
            if latest:
                self.status.mark_ready()
        else:
            log.warning(f"Refresh #{seq} failed: {failure.detail}")
            self.cache.clear()
            if latest:
                self.status.mark_failed(failure.detail)

        self._changed()
        return True

    def _reconcile_selection(self) -> None:
        """Bring the selection in line with a freshly committed snapshot."""
        current = self.selection.current()
        if current is None:
            return
        fresh = self.cache.get(current.id)
        if fresh is None:
            log.info(f"Selected user {current.id} is gone after refresh; clearing selection")
            self._clear_selection_state()
        elif not self.edit.is_open:
            self.selection.select(fresh)
        # With an edit session open the stale selection stays until it ends

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, record: UserRecord) -> None:
        """Inspect a record. Selecting a different id ends any edit session."""
        current = self.selection.current()
        if current is not None and current.id == record.id:
            if not self.edit.is_open:
                self.selection.select(record)
                self._changed()
            return
        self.edit.revert()
        self.confirmation.cancel()
        self.selection.select(record)
        log.debug(f"Selected user {record.id}")
        self._changed()

    def select_id(self, record_id: int) -> UserRecord | None:
        """Select a record from the current snapshot by id."""
        record = self.cache.get(record_id)
        if record is None:
            log.debug(f"User {record_id} not in snapshot; selection unchanged")
            return None
        self.select(record)
        return record

    def clear_selection(self) -> None:
        """Close the inspector."""
        self._clear_selection_state()
        self._changed()

    def _clear_selection_state(self) -> None:
        self.edit.revert()
        self.confirmation.cancel()
        self.selection.clear()

    # =========================================================================
    # Editing
    # =========================================================================

    def begin_edit(self) -> UserRecord:
        current = self.selection.current()
        if current is None:
            raise PreconditionViolation("Cannot edit without a selected user")
        self.confirmation.cancel()
        self.edit.open(current)
        self._changed()
        return current

    def set_field(self, name: str, value: Any) -> UserRecord:
        record = self.edit.set(name, value)
        self._changed()
        return record

    def revert_edit(self) -> None:
        self.edit.revert()
        self._changed()

    async def save_edit(self) -> MutationResult:
        """Show the edited values immediately, then send them to the store.

        The list is only corrected by the refresh that follows a confirmed
        update. When another mutation is in flight the session stays open.
        """
        if self.mutations.busy:
            log.info("Save rejected: a mutation is in flight")
            return MutationResult.REJECTED
        record = self.edit.take()
        self.selection.select(record)
        self._changed()
        return await self.mutations.update(record)

    # =========================================================================
    # Deletion
    # =========================================================================

    def request_delete(self) -> int:
        record_id = self.selection.selected_id
        if record_id is None:
            raise PreconditionViolation("Cannot delete without a selected user")
        if self.edit.is_open:
            raise PreconditionViolation("Cannot delete while editing")
        self.confirmation.request(record_id)
        self._changed()
        return record_id

    def cancel_delete(self) -> None:
        self.confirmation.cancel()
        self._changed()

    async def confirm_delete(self) -> MutationResult:
        """Dispatch the confirmed delete and close the inspector."""
        if self.mutations.busy:
            log.info("Delete rejected: a mutation is in flight")
            return MutationResult.REJECTED
        record_id = self.confirmation.accept()
        self._clear_selection_state()
        self._changed()
        return await self.mutations.delete(record_id)

    # =========================================================================
    # Creation
    # =========================================================================

    async def create(self, record: UserRecord) -> MutationResult:
        return await self.mutations.create(record)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Tear down: late responses are ignored and the client is closed."""
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        log.info("Sync controller closed")
        await self.client.aclose()
