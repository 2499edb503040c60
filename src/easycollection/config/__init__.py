"""Configuration exports."""

from easycollection.config.loader import DEFAULT_CONFIG_PATH, load_app_config, load_env_file
from easycollection.config.models import (
    AppConfig,
    CollectionConfig,
    LoggingConfig,
    StorageConfig,
)

__all__ = [
    "AppConfig",
    "CollectionConfig",
    "DEFAULT_CONFIG_PATH",
    "LoggingConfig",
    "StorageConfig",
    "load_app_config",
    "load_env_file",
]
