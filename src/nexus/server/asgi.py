"""ASGI entry point for running the nexus server via uvicorn CLI.

Used by `nexus start --detach` and process managers:
    python -m uvicorn nexus.server.asgi:app --host ... --port ...
"""

from nexus.config.loader import load_config
from nexus.log import configure_logging
from nexus.server.app import create_app

config = load_config()
configure_logging(config)
app = create_app(config)
