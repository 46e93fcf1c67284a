"""Process-wide logging setup."""

import logging

from nexus.config.schema import NexusConfig


def configure_logging(config: NexusConfig) -> None:
    """Install the root handler using the configured level and format."""
    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format=config.logging.format,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
