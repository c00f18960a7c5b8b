"""Model classes for userdesk."""

from model.record import Gender, UserRecord
from model.serializers import record_from_wire, record_to_wire, records_from_wire
from model.status import FetchStatus, StatusTracker

__all__ = [
    "Gender",
    "UserRecord",
    "FetchStatus",
    "StatusTracker",
    "record_from_wire",
    "record_to_wire",
    "records_from_wire",
]
