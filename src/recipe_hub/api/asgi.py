"""ASGI entrypoint for the recipe hub API."""

import uvicorn

from recipe_hub.api.app import create_app
from recipe_hub.containers import build_container

container = build_container()
app = create_app(container)


def main() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=container.settings.host, port=container.settings.port)
