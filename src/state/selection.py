"""SelectionStore: the record under inspection."""

from __future__ import annotations

from model import UserRecord


class SelectionStore:
    """Holds at most one selected record."""

    def __init__(self) -> None:
        self._current: UserRecord | None = None

    def select(self, record: UserRecord) -> None:
        self._current = record

    def clear(self) -> None:
        self._current = None

    def current(self) -> UserRecord | None:
        return self._current

    @property
    def selected_id(self) -> int | None:
        return self._current.id if self._current is not None else None

    def __bool__(self) -> bool:
        return self._current is not None
