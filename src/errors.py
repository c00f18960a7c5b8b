"""Exception hierarchy for userdesk."""

from __future__ import annotations


class UserDeskError(Exception):
    """Base class for all userdesk errors."""


class RemoteError(UserDeskError):
    """The record store could not be reached or answered with a non-2xx status.

    ``detail`` is the raw server-provided text (or the transport error message)
    and is surfaced to the operator unchanged.
    """

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    @classmethod
    def wrap(cls, exc: RemoteError) -> RemoteError:
        """Re-raise a generic RemoteError as this more specific kind."""
        return cls(exc.detail, status_code=exc.status_code)


class FetchFailure(RemoteError):
    """Bulk list retrieval failed."""


class MutationFailure(RemoteError):
    """A create, update or delete request failed."""


class PreconditionViolation(UserDeskError):
    """An internal invariant was breached by the caller.

    The interface is built so these are unreachable; they are never shown
    to the operator.
    """


class SettingsError(UserDeskError):
    """Configuration could not be loaded or is invalid."""
