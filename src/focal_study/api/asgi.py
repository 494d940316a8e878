"""ASGI entrypoint for the Focal Study API."""

from focal_study.api.app import create_app
from focal_study.containers import build_container

app = create_app(build_container())
