"""ASGI entrypoint for the Fitbit link API."""

from fitbit_link.api.app import create_app
from fitbit_link.containers import build_container

app = create_app(build_container())
