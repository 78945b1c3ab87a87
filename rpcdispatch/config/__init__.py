"""Configuration module for rpcdispatch."""

from rpcdispatch.config.loader import load_config, get_config_path, save_config
from rpcdispatch.config.schema import Config, LoggingConfig, ServerConfig
from rpcdispatch.config.access import get_config, clear_config_cache

__all__ = [
    "Config",
    "LoggingConfig",
    "ServerConfig",
    "load_config",
    "save_config",
    "get_config_path",
    "get_config",
    "clear_config_cache",
]
