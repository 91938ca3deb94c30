"""Application configuration."""

import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from phoenix_users.adapters.phoenix_user_client import ApiClientConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    phoenix_api_base_url: str
    phoenix_api_timeout: float = Field(default=10.0, gt=0)
    phoenix_api_retry_attempts: int = Field(default=3, ge=1)
    phoenix_api_retry_server_errors: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_retries: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def api_client_config(self) -> ApiClientConfig:
        """Build the explicit client configuration from these settings."""
        return ApiClientConfig(
            base_url=self.phoenix_api_base_url,
            timeout_seconds=self.phoenix_api_timeout,
            max_retry_attempts=self.phoenix_api_retry_attempts,
            retry_server_errors=self.phoenix_api_retry_server_errors,
        )
