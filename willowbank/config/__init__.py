"""Configuration system for willowbank."""

from .loader import get_config_path, get_database_path, load_config
from .schema import DatabaseConfig, ServerConfig, WillowbankConfig

__all__ = [
    "WillowbankConfig",
    "DatabaseConfig",
    "ServerConfig",
    "load_config",
    "get_config_path",
    "get_database_path",
]
