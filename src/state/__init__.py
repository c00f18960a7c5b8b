"""Client-side state containers: list snapshot, selection, edit buffer, delete confirmation."""

from state.confirmation import ConfirmState, DeleteConfirmation
from state.edit_buffer import EditBuffer, EditState
from state.list_cache import ListCache
from state.selection import SelectionStore

__all__ = [
    "ConfirmState",
    "DeleteConfirmation",
    "EditBuffer",
    "EditState",
    "ListCache",
    "SelectionStore",
]
