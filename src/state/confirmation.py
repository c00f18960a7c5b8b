"""Delete confirmation state machine."""

from __future__ import annotations

from enum import Enum

from errors import PreconditionViolation


class ConfirmState(Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"


class DeleteConfirmation:
    """Idle -> Confirming -> Idle, scoped to one record id at a time."""

    def __init__(self) -> None:
        self._target: int | None = None

    @property
    def state(self) -> ConfirmState:
        return ConfirmState.CONFIRMING if self._target is not None else ConfirmState.IDLE

    @property
    def target(self) -> int | None:
        return self._target

    def request(self, record_id: int) -> None:
        if self._target is not None:
            raise PreconditionViolation(
                f"A delete confirmation is already open for user {self._target}"
            )
        self._target = record_id

    def cancel(self) -> None:
        self._target = None

    def accept(self) -> int:
        """Close the confirmation and return the id to delete."""
        if self._target is None:
            raise PreconditionViolation("No delete confirmation is open")
        record_id = self._target
        self._target = None
        return record_id
