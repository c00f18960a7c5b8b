"""User record model."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any


class Gender(Enum):
    """Gender values accepted by the record store."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class UserRecord:
    """One user as held by the record store.

    Records are immutable; edits produce a new instance via ``with_field``.
    ``date_of_birth`` keeps the server's ISO-8601 string verbatim so it
    round-trips unchanged; ``born_at`` parses it for display only.
    """

    id: int
    first_name: str
    last_name: str
    gender: Gender
    date_of_birth: str
    bio: str | None = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_field(self, name: str, value: Any) -> UserRecord:
        """Return a copy with one field replaced."""
        if name not in self.field_names():
            raise KeyError(f"Unknown user field: {name}")
        return replace(self, **{name: value})

    @property
    def born_at(self) -> datetime | None:
        """Parsed date of birth, or None when the stored string is not ISO-8601."""
        try:
            return datetime.fromisoformat(self.date_of_birth)
        except ValueError:
            return None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"#{self.id} {self.full_name}"
