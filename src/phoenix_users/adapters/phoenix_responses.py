"""Classification of Phoenix API responses into envelopes or errors."""

import json

from phoenix_users.domain.errors import (
    ApiConnectionError,
    NotFoundError,
    ProtocolError,
    ValidationError,
)

_NO_CONTENT = 204
_NOT_FOUND = 404
_UNPROCESSABLE_ENTITY = 422
_UNKNOWN_ERROR = "Unknown error"


def interpret_response(status_code: int, content: bytes) -> dict[str, object]:
    """Map a status code and raw body to the decoded envelope.

    Raises the matching ``UserApiError`` subclass for any non-2xx status.
    """
    if status_code == _NO_CONTENT:
        return {}
    if 200 <= status_code < 300:
        try:
            decoded = json.loads(content)
        except ValueError as exc:
            raise ApiConnectionError(
                f"Failed to decode API response: {exc}", status_code=status_code
            ) from exc
        if not isinstance(decoded, dict):
            raise ProtocolError(status_code=status_code)
        return decoded

    message, field_errors = _error_details(content)
    if status_code == _NOT_FOUND:
        raise NotFoundError(message)
    if status_code == _UNPROCESSABLE_ENTITY:
        raise ValidationError(message, field_errors)
    raise ApiConnectionError(
        f"request failed with status {status_code}: {message}",
        status_code=status_code,
    )


def require_record(envelope: dict[str, object]) -> dict[str, object]:
    """Return the single user object held by an envelope."""
    data = envelope.get("data")
    if not isinstance(data, dict):
        raise ProtocolError()
    return data


def require_records(envelope: dict[str, object]) -> list[dict[str, object]]:
    """Return the list of user objects held by an envelope."""
    data = envelope.get("data")
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ProtocolError()
    return data


def _error_details(content: bytes) -> tuple[str, dict[str, list[str]]]:
    """Extract ``message`` and ``errors`` from an error body, tolerating junk."""
    try:
        decoded = json.loads(content) if content else {}
    except ValueError:
        return _UNKNOWN_ERROR, {}
    if not isinstance(decoded, dict):
        return _UNKNOWN_ERROR, {}
    message = decoded.get("message")
    if not isinstance(message, str) or not message:
        message = _UNKNOWN_ERROR
    return message, _field_errors(decoded.get("errors"))


def _field_errors(raw: object) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        return {}
    errors: dict[str, list[str]] = {}
    for field_name, messages in raw.items():
        if isinstance(messages, list):
            errors[str(field_name)] = [str(message) for message in messages]
        else:
            errors[str(field_name)] = [str(messages)]
    return errors
