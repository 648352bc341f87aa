"""
Configuration management for Tanuki.

Handles client configuration and loading of configuration files.
"""

from tanuki.config.settings import (
    ClientConfig,
    LoggingConfig,
    TanukiConfig,
    config_from_env,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "TanukiConfig",
    "config_from_env",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
