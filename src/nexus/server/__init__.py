"""HTTP API server."""

from nexus.server.app import create_app

__all__ = ["create_app"]
