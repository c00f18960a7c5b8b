"""EditBuffer: working copy of the selection during an edit session."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from errors import PreconditionViolation
from model import UserRecord

log = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"id"})


class EditState(Enum):
    CLOSED = "closed"
    OPEN = "open"


class EditBuffer:
    """Mutable working copy of one record.

    The buffer is always a complete record, never partially initialized.
    Each ``set`` is an independent mutation of the buffer only; nothing is
    sent anywhere until the session is saved by the controller.
    """

    def __init__(self) -> None:
        self._record: UserRecord | None = None

    @property
    def state(self) -> EditState:
        return EditState.OPEN if self._record is not None else EditState.CLOSED

    @property
    def is_open(self) -> bool:
        return self._record is not None

    @property
    def record_id(self) -> int | None:
        return self._record.id if self._record is not None else None

    def open(self, record: UserRecord) -> None:
        """Start a session as an exact copy of ``record``."""
        if self._record is not None:
            raise PreconditionViolation("Edit session already open")
        self._record = record
        log.debug(f"Edit session opened for user {record.id}")

    def set(self, name: str, value: Any) -> UserRecord:
        """Replace one field in the buffer and return the new buffer contents."""
        if self._record is None:
            raise PreconditionViolation("No edit session is open")
        if name in IMMUTABLE_FIELDS:
            raise PreconditionViolation(f"Field '{name}' cannot be edited")
        self._record = self._record.with_field(name, value)
        return self._record

    def contents(self) -> UserRecord:
        if self._record is None:
            raise PreconditionViolation("No edit session is open")
        return self._record

    def revert(self) -> None:
        """Discard the buffer. Safe to call when already closed."""
        if self._record is not None:
            log.debug(f"Edit session for user {self._record.id} reverted")
        self._record = None

    def take(self) -> UserRecord:
        """Close the session and return the edited record (used by save)."""
        record = self.contents()
        self._record = None
        return record
