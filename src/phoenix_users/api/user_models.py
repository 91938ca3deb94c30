"""Pydantic models for the user JSON endpoints."""

from datetime import date, datetime

from pydantic import BaseModel

from phoenix_users.domain.users import UserRecord


class UserPayload(BaseModel):
    """Writable user fields accepted from API callers."""

    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    birthdate: date | None = None

    def to_record(self) -> UserRecord:
        """Build a not-yet-persisted record from the payload."""
        return UserRecord(
            first_name=self.first_name,
            last_name=self.last_name,
            gender=self.gender,
            birthdate=self.birthdate,
        )


class UserView(BaseModel):
    """User representation returned to API callers."""

    id: int | None
    first_name: str
    last_name: str
    full_name: str
    gender: str
    gender_label: str
    birthdate: date | None
    formatted_birthdate: str | None
    age: int | None
    inserted_at: datetime | None
    formatted_inserted_at: str | None
    updated_at: datetime | None
    formatted_updated_at: str | None

    @classmethod
    def from_record(cls, record: UserRecord, today: date | None = None) -> "UserView":
        """Project a record with its derived display fields."""
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            full_name=record.full_name,
            gender=record.gender,
            gender_label=record.gender_label,
            birthdate=record.birthdate,
            formatted_birthdate=record.formatted_birthdate,
            age=record.age(today),
            inserted_at=record.inserted_at,
            formatted_inserted_at=record.formatted_inserted_at,
            updated_at=record.updated_at,
            formatted_updated_at=record.formatted_updated_at,
        )
