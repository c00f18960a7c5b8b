"""Typed notification events for mutation progress.

Each dispatched mutation opens an :class:`Attempt`, which emits one STARTED
event immediately and exactly one terminal SUCCEEDED or FAILED event later.
The terminal event carries the same ``attempt_id`` so a subscriber can
replace the started message instead of stacking a second one.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from errors import PreconditionViolation

log = logging.getLogger(__name__)


class Operation(Enum):
    """Mutation kinds with their operator-facing texts.

    Values are (label, progress text, success text, failure text).
    """

    CREATE = ("Create User", "Creating User", "User Creation Successful", "User Creation Failure")
    UPDATE = ("Update User", "Saving User", "Saving Successful", "Saving Failure")
    DELETE = ("Delete User", "Deleting User", "Deletion Successful", "Deletion Failure")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def progress_text(self) -> str:
        return self.value[1]

    @property
    def success_text(self) -> str:
        return self.value[2]

    @property
    def failure_text(self) -> str:
        return self.value[3]


class NotificationKind(Enum):
    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not NotificationKind.STARTED


@dataclass(frozen=True)
class Notification:
    """One event of the started/succeeded/failed contract."""

    kind: NotificationKind
    operation: Operation
    attempt_id: int
    detail: str | None = None

    @property
    def label(self) -> str:
        return self.operation.label

    @property
    def message(self) -> str:
        """Text to display for this event."""
        if self.kind is NotificationKind.STARTED:
            return self.operation.progress_text
        if self.kind is NotificationKind.SUCCEEDED:
            return self.operation.success_text
        return self.operation.failure_text

    @property
    def supersedes(self) -> int | None:
        """Attempt whose started event this terminal event replaces."""
        return self.attempt_id if self.kind.is_terminal else None


Listener = Callable[[Notification], None]


class NotificationBus:
    """Fan-out of notifications to subscribers.

    Subscribers are called synchronously in subscription order. A subscriber
    that raises is logged and skipped so one broken view cannot stop the
    others from seeing a terminal event.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                log.exception(f"Notification listener failed for {notification}")

    def start(self, operation: Operation) -> Attempt:
        """Open an attempt and emit its STARTED event."""
        attempt = Attempt(self, operation, next(self._ids))
        self.emit(Notification(NotificationKind.STARTED, operation, attempt.attempt_id))
        return attempt


class Attempt:
    """Handle for one mutation attempt; allows exactly one terminal event."""

    def __init__(self, bus: NotificationBus, operation: Operation, attempt_id: int) -> None:
        self._bus = bus
        self.operation = operation
        self.attempt_id = attempt_id
        self._outcome: NotificationKind | None = None

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    def succeed(self) -> None:
        self._finish(NotificationKind.SUCCEEDED, None)

    def fail(self, detail: str) -> None:
        self._finish(NotificationKind.FAILED, detail)

    def _finish(self, kind: NotificationKind, detail: str | None) -> None:
        if self._outcome is not None:
            raise PreconditionViolation(
                f"{self.operation.label} attempt {self.attempt_id} already {self._outcome.value}"
            )
        self._outcome = kind
        self._bus.emit(Notification(kind, self.operation, self.attempt_id, detail))
