"""Tests for user form validation."""

from datetime import date

import pytest

from phoenix_users.domain.users import UserRecord
from phoenix_users.services.validation import validate_user

_TODAY = date(2024, 6, 1)


def _valid_user(**changes: object) -> UserRecord:
    return UserRecord(
        first_name="Jan",
        last_name="Kowalski",
        gender="male",
        birthdate=date(1990, 1, 15),
    ).with_changes(**changes)


def test_valid_user_has_no_errors() -> None:
    assert validate_user(_valid_user(), today=_TODAY) == {}


@pytest.mark.parametrize(
    ("changes", "field_name", "message"),
    [
        ({"first_name": ""}, "first_name", "First name is required"),
        (
            {"first_name": " "},
            "first_name",
            "First name must be at least 2 characters long",
        ),
        (
            {"first_name": "J"},
            "first_name",
            "First name must be at least 2 characters long",
        ),
        (
            {"last_name": "a" * 51},
            "last_name",
            "Last name cannot be longer than 50 characters",
        ),
        ({"gender": ""}, "gender", "Gender is required"),
        ({"gender": "other"}, "gender", 'Gender must be either "male" or "female"'),
        ({"birthdate": None}, "birthdate", "Birth date is required"),
        ({"birthdate": _TODAY}, "birthdate", "Birth date must be in the past"),
    ],
)
def test_invalid_fields_are_reported(
    changes: dict[str, object], field_name: str, message: str
) -> None:
    errors = validate_user(_valid_user(**changes), today=_TODAY)

    assert errors == {field_name: [message]}


def test_empty_user_reports_every_field() -> None:
    errors = validate_user(UserRecord(), today=_TODAY)

    assert set(errors) == {"first_name", "last_name", "gender", "birthdate"}


def test_whitespace_name_is_measured_not_trimmed() -> None:
    errors = validate_user(_valid_user(last_name="  "), today=_TODAY)

    assert errors == {}
