"""Phoenix user API client adapter."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from phoenix_users.adapters.phoenix_responses import (
    interpret_response,
    require_record,
    require_records,
)
from phoenix_users.domain.errors import ApiConnectionError
from phoenix_users.domain.users import UserRecord, from_wire, to_wire

_logger = logging.getLogger(__name__)

_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
_BACKOFF_BASE_SECONDS = 0.1


@dataclass(frozen=True)
class ApiClientConfig:
    """Connection settings for the Phoenix user API."""

    base_url: str
    timeout_seconds: float = 10.0
    max_retry_attempts: int = 3
    retry_server_errors: bool = False

    def __post_init__(self) -> None:
        if self.max_retry_attempts < 1:
            raise ValueError("max_retry_attempts must be at least 1")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


class UserApiClient(Protocol):
    """Interface for the Phoenix user API."""

    async def list_users(self) -> list[UserRecord]:
        """Return every user known to the API."""

    async def get_user(self, user_id: int) -> UserRecord:
        """Return a single user by id."""

    async def create_user(self, record: UserRecord) -> UserRecord:
        """Create a user and return the stored record."""

    async def update_user(self, record: UserRecord) -> UserRecord:
        """Replace a persisted user and return the stored record."""

    async def delete_user(self, user_id: int) -> None:
        """Delete a user by id."""


@dataclass
class HttpxUserApiClient(UserApiClient):
    """HTTPX-backed Phoenix user API client with transport retries."""

    config: ApiClientConfig
    http_client: httpx.AsyncClient
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    @classmethod
    def create(cls, config: ApiClientConfig) -> "HttpxUserApiClient":
        """Create a user API client with a managed httpx session."""
        _logger.info(
            "User API client configured: base_url=%s timeout=%s retry_attempts=%s",
            config.base_url,
            config.timeout_seconds,
            config.max_retry_attempts,
        )
        return cls(config=config, http_client=httpx.AsyncClient())

    async def list_users(self) -> list[UserRecord]:
        """Fetch all users."""
        envelope = await self._request("GET", "/users")
        return [from_wire(item) for item in require_records(envelope)]

    async def get_user(self, user_id: int) -> UserRecord:
        """Fetch one user by id."""
        envelope = await self._request("GET", f"/users/{user_id}")
        return from_wire(require_record(envelope))

    async def create_user(self, record: UserRecord) -> UserRecord:
        """Create a user from the record's writable fields."""
        envelope = await self._request("POST", "/users", to_wire(record))
        return from_wire(require_record(envelope))

    async def update_user(self, record: UserRecord) -> UserRecord:
        """Update the persisted user identified by ``record.id``."""
        if record.id is None:
            raise ValueError("Cannot update user without ID")
        envelope = await self._request("PUT", f"/users/{record.id}", to_wire(record))
        return from_wire(require_record(envelope))

    async def delete_user(self, user_id: int) -> None:
        """Delete a user by id."""
        await self._request("DELETE", f"/users/{user_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, payload: dict[str, str] | None = None
    ) -> dict[str, object]:
        """Send a request, retrying transport failures with exponential backoff."""
        url = f"{self.config.base_url}/{path.lstrip('/')}"
        max_attempts = self.config.max_retry_attempts
        last_exc: httpx.TransportError | None = None
        attempt = 0
        while attempt < max_attempts:
            try:
                response = await self.http_client.request(
                    method,
                    url,
                    headers=_HEADERS,
                    json=payload,
                    timeout=self.config.timeout_seconds,
                )
            except httpx.TransportError as exc:
                last_exc = exc
                _logger.warning(
                    "User API %s %s failed (attempt %s/%s): %s",
                    method,
                    path,
                    attempt + 1,
                    max_attempts,
                    exc,
                )
            else:
                if not self._should_retry_status(response.status_code, attempt):
                    return interpret_response(response.status_code, response.content)
                _logger.warning(
                    "User API %s %s returned %s (attempt %s/%s)",
                    method,
                    path,
                    response.status_code,
                    attempt + 1,
                    max_attempts,
                )
            attempt += 1
            if attempt < max_attempts:
                await self.sleep(_BACKOFF_BASE_SECONDS * 2 ** (attempt - 1))

        raise ApiConnectionError(f"Could not connect to the API: {last_exc}") from last_exc

    def _should_retry_status(self, status_code: int, attempt: int) -> bool:
        """Server errors are retried only when enabled and attempts remain."""
        if not self.config.retry_server_errors or status_code < 500:
            return False
        return attempt + 1 < self.config.max_retry_attempts
