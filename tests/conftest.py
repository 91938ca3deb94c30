"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

import httpx
import pytest

from phoenix_users.adapters.phoenix_user_client import (
    ApiClientConfig,
    HttpxUserApiClient,
    UserApiClient,
)
from phoenix_users.config import Settings
from phoenix_users.containers import AppContainer
from phoenix_users.domain.errors import NotFoundError
from phoenix_users.domain.users import UserRecord
from phoenix_users.services.users import UserService


@dataclass
class InMemoryUserApiClient(UserApiClient):
    """In-memory stand-in for the Phoenix user API."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    next_id: int = 1
    calls: list[str] = field(default_factory=list)

    async def list_users(self) -> list[UserRecord]:
        self.calls.append("list")
        return list(self.users.values())

    async def get_user(self, user_id: int) -> UserRecord:
        self.calls.append("get")
        if user_id not in self.users:
            raise NotFoundError("User not found")
        return self.users[user_id]

    async def create_user(self, record: UserRecord) -> UserRecord:
        self.calls.append("create")
        created = replace(record, id=self.next_id)
        self.users[created.id] = created
        self.next_id += 1
        return created

    async def update_user(self, record: UserRecord) -> UserRecord:
        self.calls.append("update")
        if record.id not in self.users:
            raise NotFoundError("User not found")
        self.users[record.id] = record
        return record

    async def delete_user(self, user_id: int) -> None:
        self.calls.append("delete")
        if self.users.pop(user_id, None) is None:
            raise NotFoundError("User not found")


@dataclass
class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_http_client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    max_retry_attempts: int = 3,
    retry_server_errors: bool = False,
    sleep: RecordingSleep | None = None,
) -> HttpxUserApiClient:
    """Build an HTTPX client whose requests are answered by ``handler``."""
    config = ApiClientConfig(
        base_url="https://phoenix.test/api/",
        timeout_seconds=2.0,
        max_retry_attempts=max_retry_attempts,
        retry_server_errors=retry_server_errors,
    )
    return HttpxUserApiClient(
        config=config,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=sleep or RecordingSleep(),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(phoenix_api_base_url="https://phoenix.test/api")


@pytest.fixture
def user_api_client() -> InMemoryUserApiClient:
    return InMemoryUserApiClient()


@pytest.fixture
def container(
    settings: Settings, user_api_client: InMemoryUserApiClient
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_client=user_api_client,
        user_service=UserService(user_api_client),
        close_resources=close_resources,
    )
