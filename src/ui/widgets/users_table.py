"""User list widget: UsersTable."""

from __future__ import annotations

from typing import Iterable

from textual.widgets import DataTable

from model import UserRecord
from ui.helpers import format_dob_date

COLUMNS = ("Student ID", "First Name", "Last Name", "Gender", "DOB")


class UsersTable(DataTable):
    """Read-only table of the current list snapshot, one row per user."""

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)
        self._snapshot: tuple[UserRecord, ...] | None = None

    def show_records(self, records: Iterable[UserRecord]) -> bool:
        """Rebuild rows when the snapshot differs from what is shown.

        Returns:
            True if the rows were rebuilt
        """
        snapshot = tuple(records)
        if self._snapshot is not None and snapshot == self._snapshot:
            return False
        self._snapshot = snapshot
        if not self.columns:
            self.add_columns(*COLUMNS)
        self.clear()
        for record in snapshot:
            self.add_row(
                str(record.id),
                record.first_name,
                record.last_name,
                record.gender.value,
                format_dob_date(record),
                key=str(record.id),
            )
        return True
