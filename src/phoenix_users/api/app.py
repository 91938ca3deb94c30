"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from phoenix_users.api.user_models import UserPayload, UserView
from phoenix_users.app_logging import configure_logging
from phoenix_users.containers import AppContainer
from phoenix_users.domain.errors import ApiErrorKind, UserApiError
from phoenix_users.domain.users import MalformedFieldError
from phoenix_users.services.users import UserFilter

_UNREACHABLE_MESSAGE = "Could not reach the user service"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level, container.settings.log_retries)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(UserApiError)
    async def handle_user_api_error(request: Request, exc: UserApiError) -> JSONResponse:
        logger.warning(
            "User API error on %s %s: %s (%s)",
            request.method,
            request.url.path,
            exc,
            exc.kind.value,
        )
        return error_response(exc)

    @app.exception_handler(MalformedFieldError)
    async def handle_malformed_field(
        request: Request, exc: MalformedFieldError
    ) -> JSONResponse:
        logger.error("Malformed user payload on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": _UNREACHABLE_MESSAGE, "details": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Validation failed",
                "errors": request_field_errors(exc.errors()),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users")
    async def list_users(  # noqa: PLR0913
        request: Request,
        first_name: str | None = None,
        last_name: str | None = None,
        gender: str | None = None,
        birthdate_from: date | None = None,
        birthdate_to: date | None = None,
    ) -> dict[str, list[UserView]]:
        """List users, filtered by optional query parameters."""
        state_container: AppContainer = request.app.state.container
        criteria = UserFilter(
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            birthdate_from=birthdate_from,
            birthdate_to=birthdate_to,
        )
        users = await state_container.user_service.list_users(criteria)
        return {"data": [UserView.from_record(user) for user in users]}

    @app.get("/users/{user_id}")
    async def get_user(user_id: int, request: Request) -> dict[str, UserView]:
        """Return one user."""
        state_container: AppContainer = request.app.state.container
        user = await state_container.user_service.get_user(user_id)
        return {"data": UserView.from_record(user)}

    @app.post("/users", status_code=status.HTTP_201_CREATED)
    async def create_user(payload: UserPayload, request: Request) -> dict[str, UserView]:
        """Create a user."""
        state_container: AppContainer = request.app.state.container
        user = await state_container.user_service.create_user(payload.to_record())
        return {"data": UserView.from_record(user)}

    @app.put("/users/{user_id}")
    async def update_user(
        user_id: int, payload: UserPayload, request: Request
    ) -> dict[str, UserView]:
        """Update a user."""
        state_container: AppContainer = request.app.state.container
        user = await state_container.user_service.update_user(
            payload.to_record().with_changes(id=user_id)
        )
        return {"data": UserView.from_record(user)}

    @app.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_user(user_id: int, request: Request) -> Response:
        """Delete a user."""
        state_container: AppContainer = request.app.state.container
        await state_container.user_service.delete_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def error_response(error: UserApiError) -> JSONResponse:
    """Translate a user API error into the JSON response shown to callers."""
    match error.kind:
        case ApiErrorKind.NOT_FOUND:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": error.message},
            )
        case ApiErrorKind.VALIDATION:
            return JSONResponse(
                status_code=422,
                content={"error": error.message, "errors": error.field_errors},
            )
        case ApiErrorKind.PROTOCOL | ApiErrorKind.CONNECTION:
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"error": _UNREACHABLE_MESSAGE, "details": error.message},
            )


def request_field_errors(errors: Sequence[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group FastAPI request errors by field, in the shape of an upstream 422."""
    field_errors: dict[str, list[str]] = {}
    for error in errors:
        location = tuple(error.get("loc", ()))
        # Skip the "body"/"query"/"path" prefix.
        field_name = str(location[1]) if len(location) > 1 else "__all__"
        field_errors.setdefault(field_name, []).append(str(error.get("msg", "")))
    return field_errors
