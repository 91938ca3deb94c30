"""User management use cases on top of the Phoenix API client."""

import logging
from dataclasses import dataclass
from datetime import date

from phoenix_users.adapters.phoenix_user_client import UserApiClient
from phoenix_users.domain.errors import ValidationError
from phoenix_users.domain.users import UserRecord
from phoenix_users.services.validation import validate_user

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserFilter:
    """Criteria for narrowing a user listing."""

    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    birthdate_from: date | None = None
    birthdate_to: date | None = None

    def matches(self, record: UserRecord) -> bool:
        """Return True when the record satisfies every criterion that is set."""
        if self.first_name and self.first_name.lower() not in record.first_name.lower():
            return False
        if self.last_name and self.last_name.lower() not in record.last_name.lower():
            return False
        if self.gender and record.gender != self.gender:
            return False
        if self.birthdate_from is None and self.birthdate_to is None:
            return True
        if record.birthdate is None:
            return False
        if self.birthdate_from is not None and record.birthdate < self.birthdate_from:
            return False
        if self.birthdate_to is not None and record.birthdate > self.birthdate_to:
            return False
        return True


@dataclass
class UserService:
    """Application service for user CRUD screens."""

    client: UserApiClient

    async def list_users(self, criteria: UserFilter | None = None) -> list[UserRecord]:
        """List users, optionally narrowed by filter criteria."""
        users = await self.client.list_users()
        if criteria is None:
            return users
        return [user for user in users if criteria.matches(user)]

    async def get_user(self, user_id: int) -> UserRecord:
        """Return one user."""
        return await self.client.get_user(user_id)

    async def create_user(self, record: UserRecord) -> UserRecord:
        """Validate and create a user."""
        self._ensure_valid(record)
        created = await self.client.create_user(record)
        _logger.info("Created user id=%s", created.id)
        return created

    async def update_user(self, record: UserRecord) -> UserRecord:
        """Validate and update a persisted user."""
        if record.id is None:
            raise ValueError("Cannot update user without ID")
        self._ensure_valid(record)
        return await self.client.update_user(record)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        await self.client.delete_user(user_id)
        _logger.info("Deleted user id=%s", user_id)

    def _ensure_valid(self, record: UserRecord) -> None:
        errors = validate_user(record)
        if errors:
            raise ValidationError("Validation failed", errors, status_code=None)
