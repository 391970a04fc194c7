"""ASGI entrypoint for the share viewer API."""

from share_viewer.api.app import create_app
from share_viewer.containers import build_container

app = create_app(build_container())
