"""ListCache: the in-memory snapshot of every user record."""

from __future__ import annotations

from typing import Iterable, Iterator

from model import UserRecord


class ListCache:
    """Snapshot of the record store as of the last completed fetch.

    There is no per-item mutation API. Every change to the remote store is
    followed by a full refresh that replaces the snapshot.
    """

    def __init__(self) -> None:
        self._records: tuple[UserRecord, ...] = ()

    def replace(self, records: Iterable[UserRecord]) -> None:
        """Replace the snapshot atomically, keeping the given order.

        Raises:
            ValueError: if two records share an id
        """
        snapshot = tuple(records)
        seen: set[int] = set()
        for record in snapshot:
            if record.id in seen:
                raise ValueError(f"Duplicate user id in snapshot: {record.id}")
            seen.add(record.id)
        self._records = snapshot

    def clear(self) -> None:
        self._records = ()

    def all(self) -> tuple[UserRecord, ...]:
        return self._records

    def get(self, record_id: int) -> UserRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def __contains__(self, record_id: object) -> bool:
        return any(record.id == record_id for record in self._records)

    def __iter__(self) -> Iterator[UserRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
