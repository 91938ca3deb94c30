"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from phoenix_users.adapters.phoenix_user_client import (
    HttpxUserApiClient,
    UserApiClient,
)
from phoenix_users.config import Settings
from phoenix_users.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_client: UserApiClient
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    user_client = HttpxUserApiClient.create(resolved_settings.api_client_config())
    user_service = UserService(user_client)

    async def close_resources() -> None:
        await user_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_client=user_client,
        user_service=user_service,
        close_resources=close_resources,
    )
