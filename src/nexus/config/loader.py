"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from nexus.config.schema import NexusConfig

DEFAULT_CONFIG_PATH = Path.home() / ".nexus" / "nexus.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(Exception):
    """Configuration loading or validation error."""


def _apply_env_overrides(config: NexusConfig) -> NexusConfig:
    """Apply deployment overrides from the environment."""
    port = os.environ.get("PORT")
    if port:
        try:
            config.server.port = int(port)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {port!r}") from e

    db_path = os.environ.get("NEXUS_DATABASE_PATH")
    if db_path:
        config.database.path = db_path

    log_level = os.environ.get("NEXUS_LOG_LEVEL")
    if log_level:
        if log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"NEXUS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        config.logging.level = log_level.upper()  # type: ignore[assignment]

    return config


def load_config(path: Optional[Path] = None) -> NexusConfig:
    """Load and validate Nexus configuration from YAML file.

    Args:
        path: Path to config file. If None, uses $NEXUS_CONFIG or the default
              location. If the file doesn't exist, returns default config.

    Returns:
        Validated configuration object with environment overrides applied

    Raises:
        ConfigError: If config file exists but is invalid
    """
    if path is None:
        env_path = os.environ.get("NEXUS_CONFIG")
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    # Zero-config mode: if file doesn't exist, use all defaults
    if not path.exists():
        return _apply_env_overrides(NexusConfig())

    try:
        with open(path, "r") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return _apply_env_overrides(NexusConfig())

        config = NexusConfig(**config_data)

    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    return _apply_env_overrides(config)


def save_config(config: NexusConfig, path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration object to save
        path: Destination path (string or Path object). If None, uses default location.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    elif isinstance(path, str):
        path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump()

    with open(path, "w") as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
