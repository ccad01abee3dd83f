# willowbank/config/loader.py
"""
Configuration loading: defaults, optional YAML file, then environment.

Uses platformdirs for cross-platform config and data directory management.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from platformdirs import user_config_path, user_data_path

from .schema import WillowbankConfig

logger = logging.getLogger(__name__)

APP_NAME = "willowbank"

# Environment variable -> (section, key) in the config tree
ENV_OVERRIDES = {
    "DATABASE_PATH": ("database", "path"),
    "CORS_ORIGIN": ("server", "cors_origin"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "ENVIRONMENT": (None, "environment"),
}


def get_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get path to the YAML config file (WILLOWBANK_CONFIG wins)."""
    environ = os.environ if environ is None else environ
    explicit = environ.get("WILLOWBANK_CONFIG")
    if explicit:
        return Path(explicit)
    return user_config_path(APP_NAME) / "config.yaml"


def get_database_path(config: WillowbankConfig) -> Path:
    """
    Resolve the SQLite database path, ensuring its directory exists.

    Falls back to <user data dir>/willowbank.db when no path is configured.
    """
    if config.database.path:
        db_path = Path(config.database.path)
    else:
        db_path = user_data_path(APP_NAME) / "willowbank.db"

    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def load_config(environ: Mapping[str, str] | None = None) -> WillowbankConfig:
    """
    Load configuration.

    Reads the YAML file if one exists, then applies environment variable
    overrides. Returns a validated Pydantic model.

    Args:
        environ: Environment mapping (defaults to os.environ)
    """
    environ = os.environ if environ is None else environ
    config_path = get_config_path(environ)

    config_data: dict = {}
    if config_path.exists():
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f) or {}
        logger.info(f"Loaded config from {config_path}")

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        if section is None:
            config_data[key] = value
        else:
            config_data.setdefault(section, {})[key] = value

    # Parse and validate with Pydantic
    return WillowbankConfig(**config_data)
