"""Controller layer: mediates between the UI, local state and the record store.

This package contains:
- sync: SyncController owning the fetch lifecycle, selection and edit session
- mutations: MutationCoordinator for create/update/delete
- notifications: typed started/succeeded/failed events
- users: event handler mixin for the Textual app
"""

from controller.sync import SyncController
from controller.mutations import MutationCoordinator, MutationResult
from controller.notifications import (
    Attempt,
    Notification,
    NotificationBus,
    NotificationKind,
    Operation,
)
from controller.users import UserEventsMixin

__all__ = [
    # Sync
    "SyncController",
    # Mutations
    "MutationCoordinator",
    "MutationResult",
    # Notifications
    "Attempt",
    "Notification",
    "NotificationBus",
    "NotificationKind",
    "Operation",
    # Event mixins
    "UserEventsMixin",
]
