"""Async HTTP client for the users record store."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from constants import DEFAULT_TIMEOUT, USERS_PATH
from errors import RemoteError
from model import UserRecord, record_to_wire, records_from_wire

log = logging.getLogger(__name__)


def _normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")


class UsersClient:
    """Thin wrapper over the four record-store endpoints.

    Every failure, whether transport-level or a non-2xx status, is raised as
    :class:`RemoteError` carrying the raw detail text. Callers decide which
    failure kind it represents.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = _normalize_base_url(base_url)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        log.debug(f"{method} {self.base_url}{path}")
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            detail = str(exc) or type(exc).__name__
            log.warning(f"{method} {path} failed: {detail}")
            raise RemoteError(detail) from exc

        if not response.is_success:
            log.warning(f"{method} {path} returned {response.status_code}: {response.text}")
            raise RemoteError(response.text, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(f"Invalid JSON from {path}: {exc}", status_code=response.status_code) from exc

    async def list_users(self) -> list[UserRecord]:
        payload = await self._request("GET", USERS_PATH)
        try:
            return records_from_wire(payload)
        except ValueError as exc:
            raise RemoteError(str(exc)) from exc

    async def create_user(self, record: UserRecord) -> Any:
        return await self._request("PUT", USERS_PATH, json=record_to_wire(record))

    async def update_user(self, record: UserRecord) -> Any:
        return await self._request("PATCH", f"{USERS_PATH}/{record.id}", json=record_to_wire(record))

    async def delete_user(self, record_id: int) -> Any:
        return await self._request("DELETE", f"{USERS_PATH}/{record_id}")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> UsersClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
