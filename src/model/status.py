"""Bulk-fetch status indicator."""

from __future__ import annotations

from enum import Enum

from constants import FETCHING_CAPTION


class FetchStatus(Enum):
    """Outcome of the most recent list fetch."""

    READY = "ready"
    BUSY = "busy"
    FAILED = "failed"


class StatusTracker:
    """Tri-state indicator driving the refresh spinner and table caption.

    Only the bulk list fetch moves it to BUSY. A failed mutation may mark it
    FAILED, but per-mutation busy state lives in MutationCoordinator.
    """

    def __init__(self) -> None:
        self._status = FetchStatus.READY
        self._detail: str | None = None

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def detail(self) -> str | None:
        """Failure detail of the last FAILED transition."""
        return self._detail

    @property
    def caption(self) -> str:
        if self._status is FetchStatus.BUSY:
            return FETCHING_CAPTION
        if self._status is FetchStatus.FAILED:
            return f"Error: {self._detail}"
        return ""

    @property
    def is_busy(self) -> bool:
        return self._status is FetchStatus.BUSY

    def mark_busy(self) -> None:
        self._status = FetchStatus.BUSY
        self._detail = None

    def mark_ready(self) -> None:
        self._status = FetchStatus.READY
        self._detail = None

    def mark_failed(self, detail: str) -> None:
        self._status = FetchStatus.FAILED
        self._detail = detail

    def __repr__(self) -> str:
        return f"StatusTracker({self._status.name}, detail={self._detail!r})"
