"""Configuration schema and loader."""

from nexus.config.loader import ConfigError, load_config, save_config
from nexus.config.schema import NexusConfig

__all__ = ["ConfigError", "NexusConfig", "load_config", "save_config"]
