"""Form-level validation for user records before they are sent upstream."""

from datetime import date

from pydantic import BaseModel, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from phoenix_users.domain.users import Gender, UserRecord

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


class UserForm(BaseModel):
    """Constraints a user must satisfy before create or update."""

    first_name: str
    last_name: str
    gender: str
    birthdate: date | None = None

    @field_validator("first_name")
    @classmethod
    def _check_first_name(cls, value: str) -> str:
        return _check_name(value, "First name")

    @field_validator("last_name")
    @classmethod
    def _check_last_name(cls, value: str) -> str:
        return _check_name(value, "Last name")

    @field_validator("gender")
    @classmethod
    def _check_gender(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("gender_required", "Gender is required")
        if value not in {gender.value for gender in Gender}:
            raise PydanticCustomError(
                "gender_choice", 'Gender must be either "male" or "female"'
            )
        return value

    @field_validator("birthdate")
    @classmethod
    def _check_birthdate(cls, value: date | None, info: ValidationInfo) -> date | None:
        if value is None:
            raise PydanticCustomError("birthdate_required", "Birth date is required")
        today = (info.context or {}).get("today") or date.today()
        if value >= today:
            raise PydanticCustomError(
                "birthdate_past", "Birth date must be in the past"
            )
        return value


def validate_user(record: UserRecord, today: date | None = None) -> dict[str, list[str]]:
    """Return validation messages keyed by wire field name; empty when valid."""
    try:
        UserForm.model_validate(
            {
                "first_name": record.first_name,
                "last_name": record.last_name,
                "gender": record.gender,
                "birthdate": record.birthdate,
            },
            context={"today": today},
        )
    except PydanticValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "__all__"
            errors.setdefault(field_name, []).append(error["msg"])
        return errors
    return {}


def _check_name(value: str, label: str) -> str:
    if not value:
        raise PydanticCustomError("name_required", "{label} is required", {"label": label})
    if len(value) < NAME_MIN_LENGTH:
        raise PydanticCustomError(
            "name_too_short",
            "{label} must be at least {limit} characters long",
            {"label": label, "limit": NAME_MIN_LENGTH},
        )
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "name_too_long",
            "{label} cannot be longer than {limit} characters",
            {"label": label, "limit": NAME_MAX_LENGTH},
        )
    return value
