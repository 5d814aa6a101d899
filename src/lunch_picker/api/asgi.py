"""ASGI entrypoint for the lunch picker API."""

from lunch_picker.api.app import create_app
from lunch_picker.containers import build_container

app = create_app(build_container())
