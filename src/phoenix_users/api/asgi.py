"""ASGI entrypoint for the user management API."""

from phoenix_users.api.app import create_app
from phoenix_users.containers import build_container

app = create_app(build_container())
