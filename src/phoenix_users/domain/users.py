"""User records and their mapping to the Phoenix API wire format."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from enum import Enum

_WIRE_DATE_FORMAT = "%Y-%m-%d"
_DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Gender(str, Enum):
    """Genders accepted by the user API."""

    MALE = "male"
    FEMALE = "female"


_GENDER_LABELS = {Gender.MALE.value: "Male", Gender.FEMALE.value: "Female"}


class MalformedFieldError(ValueError):
    """A field in an API payload has a value of the wrong shape."""

    description = "value"

    def __init__(self, field_name: str, raw_value: object) -> None:
        super().__init__(
            f"Malformed {self.description} in {field_name!r}: {raw_value!r}"
        )
        self.field_name = field_name
        self.raw_value = raw_value


class MalformedDateError(MalformedFieldError):
    """A date field in an API payload could not be parsed."""

    description = "date"


@dataclass(frozen=True)
class UserRecord:
    """A user as known to the Phoenix API.

    ``id`` is set only for users the API has persisted, and the two
    timestamps are only ever filled from API responses.
    """

    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    birthdate: date | None = None
    inserted_at: datetime | None = None
    updated_at: datetime | None = None

    def with_changes(self, **changes: object) -> "UserRecord":
        """Return a copy of the record with the given fields replaced."""
        return replace(self, **changes)

    @property
    def full_name(self) -> str:
        """First and last name joined by a single space."""
        parts = (self.first_name.strip(), self.last_name.strip())
        return " ".join(part for part in parts if part)

    @property
    def gender_label(self) -> str:
        """Human readable gender."""
        label = _GENDER_LABELS.get(self.gender)
        if label is not None:
            return label
        return self.gender[:1].upper() + self.gender[1:]

    def age(self, today: date | None = None) -> int | None:
        """Return the age in whole years, or None without a birthdate."""
        if self.birthdate is None:
            return None
        reference = today or date.today()
        years = reference.year - self.birthdate.year
        if (reference.month, reference.day) < (
            self.birthdate.month,
            self.birthdate.day,
        ):
            years -= 1
        return years

    @property
    def formatted_birthdate(self) -> str | None:
        if self.birthdate is None:
            return None
        return self.birthdate.strftime(_WIRE_DATE_FORMAT)

    @property
    def formatted_inserted_at(self) -> str | None:
        if self.inserted_at is None:
            return None
        return self.inserted_at.strftime(_DISPLAY_TIMESTAMP_FORMAT)

    @property
    def formatted_updated_at(self) -> str | None:
        if self.updated_at is None:
            return None
        return self.updated_at.strftime(_DISPLAY_TIMESTAMP_FORMAT)


def from_wire(fields: Mapping[str, object]) -> UserRecord:
    """Build a record from a user object returned by the API."""
    return UserRecord(
        id=_parse_id(fields.get("id")),
        first_name=_string(fields.get("first_name")),
        last_name=_string(fields.get("last_name")),
        gender=_string(fields.get("gender")),
        birthdate=_parse_date("birthdate", fields.get("birthdate")),
        inserted_at=_parse_timestamp("inserted_at", fields.get("inserted_at")),
        updated_at=_parse_timestamp("updated_at", fields.get("updated_at")),
    )


def to_wire(record: UserRecord) -> dict[str, str]:
    """Serialize the writable fields of a record for create/update requests."""
    payload = {
        "first_name": record.first_name,
        "last_name": record.last_name,
        "gender": record.gender,
    }
    if record.birthdate is not None:
        payload["birthdate"] = record.birthdate.strftime(_WIRE_DATE_FORMAT)
    return payload


def _parse_id(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedFieldError("id", value)
    return value


def _string(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_date(field_name: str, value: object) -> date | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise MalformedDateError(field_name, value)
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    # Some payloads carry a full timestamp where a date is expected.
    try:
        return datetime.fromisoformat(value).date()
    except ValueError as exc:
        raise MalformedDateError(field_name, value) from exc


def _parse_timestamp(field_name: str, value: object) -> datetime | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise MalformedDateError(field_name, value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise MalformedDateError(field_name, value) from exc
    if parsed.tzinfo is None:
        # Phoenix serializes naive UTC timestamps.
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
