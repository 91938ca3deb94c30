"""Tests for container wiring and settings."""

import asyncio

import pytest
from pydantic import ValidationError

from phoenix_users.adapters.phoenix_user_client import HttpxUserApiClient
from phoenix_users.config import Settings
from phoenix_users.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.user_client, HttpxUserApiClient)
    assert container.user_client.config.base_url == "https://phoenix.test/api"
    assert container.user_client.config.max_retry_attempts == 3
    assert container.user_service.client is container.user_client
    asyncio.run(container.close_resources())


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("PHOENIX_API_BASE_URL", "https://phoenix.example/")
    monkeypatch.setenv("PHOENIX_API_TIMEOUT", "2.5")
    monkeypatch.setenv("PHOENIX_API_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("PHOENIX_API_RETRY_SERVER_ERRORS", "true")

    config = Settings().api_client_config()

    assert config.base_url == "https://phoenix.example"
    assert config.timeout_seconds == 2.5
    assert config.max_retry_attempts == 5
    assert config.retry_server_errors is True


def test_settings_reject_zero_retry_attempts() -> None:
    with pytest.raises(ValidationError):
        Settings(phoenix_api_base_url="https://phoenix.test", phoenix_api_retry_attempts=0)
