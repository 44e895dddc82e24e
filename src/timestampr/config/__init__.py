"""Configuration management for Timestampr.

Usage:
    >>> from timestampr.config import load_database_config
    >>> config = load_database_config(port_override="3307")
    >>> print(config.host, config.port)
"""

from timestampr.config.settings import (
    DEFAULT_PORT,
    DatabaseConfig,
    EnvironmentSettings,
    build_database_config,
    load_database_config,
    locate_env_file,
    read_environment,
    resolve_port,
)

__all__ = [
    "DEFAULT_PORT",
    "DatabaseConfig",
    "EnvironmentSettings",
    "build_database_config",
    "load_database_config",
    "locate_env_file",
    "read_environment",
    "resolve_port",
]
