"""Shared fixtures for userdesk tests."""

import asyncio

import pytest

from controller import NotificationBus, SyncController
from errors import RemoteError
from model import Gender, UserRecord


class FakeUsersClient:
    """In-memory stand-in for UsersClient.

    Calls run immediately against ``records`` unless their name was passed to
    ``hold()``; held calls wait until the test calls ``release()``, which lets
    tests choose the order in which overlapping requests resolve.
    """

    base_url = "http://users.test"

    def __init__(self, records=None):
        self.records = list(records or [])
        self.calls = []
        self.failures = {}
        self.held = set()
        self.pending = {}
        self.closed = False

    def hold(self, name):
        self.held.add(name)

    def fail(self, name, detail, status_code=500):
        """Make the next call to ``name`` raise RemoteError(detail)."""
        self.failures[name] = RemoteError(detail, status_code=status_code)

    def release(self, name, index=0, outcome=None):
        """Resolve a held call.

        ``outcome`` may be an exception to raise, a value to return, or None
        to run the call against ``records``.
        """
        self.pending[name][index].set_result(outcome)

    async def _dispatch(self, name, action):
        self.calls.append(name)
        if name in self.held:
            future = asyncio.get_running_loop().create_future()
            self.pending.setdefault(name, []).append(future)
            outcome = await future
            if isinstance(outcome, BaseException):
                raise outcome
            if outcome is not None:
                return outcome
        elif name in self.failures:
            raise self.failures.pop(name)
        return action()

    async def list_users(self):
        return await self._dispatch("list_users", lambda: list(self.records))

    async def create_user(self, record):
        def create():
            if any(r.id == record.id for r in self.records):
                raise RemoteError("duplicate id", status_code=409)
            self.records.append(record)
            return {"sid": record.id}

        return await self._dispatch("create_user", create)

    async def update_user(self, record):
        def update():
            self.records = [record if r.id == record.id else r for r in self.records]
            return {"sid": record.id}

        return await self._dispatch("update_user", update)

    async def delete_user(self, record_id):
        def delete():
            self.records = [r for r in self.records if r.id != record_id]
            return {}

        return await self._dispatch("delete_user", delete)

    async def aclose(self):
        self.closed = True


async def settle(rounds=5):
    """Let pending tasks run up to their next await."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def ada():
    return UserRecord(
        id=1,
        first_name="Ada",
        last_name="Lovelace",
        gender=Gender.FEMALE,
        date_of_birth="1815-12-10T00:00:00",
        bio="First programmer",
    )


@pytest.fixture
def alan():
    return UserRecord(
        id=2,
        first_name="Alan",
        last_name="Turing",
        gender=Gender.MALE,
        date_of_birth="1912-06-23",
    )


@pytest.fixture
def grace():
    return UserRecord(
        id=3,
        first_name="Grace",
        last_name="Hopper",
        gender=Gender.FEMALE,
        date_of_birth="1906-12-09T08:30:00",
        bio=None,
    )


@pytest.fixture
def client(ada, alan):
    return FakeUsersClient([ada, alan])


@pytest.fixture
def bus():
    return NotificationBus()


@pytest.fixture
def notifications(bus):
    """Every notification emitted on ``bus``, in order."""
    seen = []
    bus.subscribe(seen.append)
    return seen


@pytest.fixture
def controller(client, bus):
    return SyncController(client, bus)
