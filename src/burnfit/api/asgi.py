"""ASGI entrypoint for the BurnFit API."""

from burnfit.api.app import create_app
from burnfit.containers import build_container

app = create_app(build_container())
