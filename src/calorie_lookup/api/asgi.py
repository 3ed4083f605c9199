"""ASGI entrypoint for the calorie lookup API."""

from calorie_lookup.api.app import create_app
from calorie_lookup.containers import build_container

app = create_app(build_container())
