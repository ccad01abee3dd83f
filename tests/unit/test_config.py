# tests/unit/test_config.py
"""Unit tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from willowbank.config import WillowbankConfig, get_database_path, load_config


def test_defaults_without_file(tmp_path: Path):
    config = load_config({"WILLOWBANK_CONFIG": str(tmp_path / "missing.yaml")})

    assert config.environment == "development"
    assert config.server.port == 3001
    assert config.server.cors_origin == "http://localhost:3000"
    assert config.database.seed_defaults is True
    assert not config.is_production


def test_yaml_file_is_read_and_unknown_keys_ignored(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "environment": "production",
                "server": {"port": 8080, "theme": "dark"},
                "legacy_section": {"x": 1},
            }
        )
    )

    config = load_config({"WILLOWBANK_CONFIG": str(config_path)})

    assert config.is_production
    assert config.server.port == 8080


def test_environment_overrides_file(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"server": {"port": 8080}}))

    config = load_config(
        {
            "WILLOWBANK_CONFIG": str(config_path),
            "PORT": "9000",
            "CORS_ORIGIN": "https://garden.example",
            "DATABASE_PATH": str(tmp_path / "db.sqlite"),
            "ENVIRONMENT": "test",
        }
    )

    assert config.server.port == 9000
    assert config.server.cors_origin == "https://garden.example"
    assert config.database.path == str(tmp_path / "db.sqlite")
    assert config.environment == "test"


def test_invalid_values_rejected(tmp_path: Path):
    with pytest.raises(ValidationError):
        load_config({"WILLOWBANK_CONFIG": str(tmp_path / "none.yaml"), "PORT": "70000"})


def test_unlisted_environment_name_is_accepted(tmp_path: Path):
    config = load_config(
        {"WILLOWBANK_CONFIG": str(tmp_path / "none.yaml"), "ENVIRONMENT": "staging"}
    )

    assert config.environment == "staging"
    assert not config.is_production
    assert WillowbankConfig(environment="production").is_production


def test_database_path_parent_created(tmp_path: Path):
    target = tmp_path / "nested" / "dir" / "willowbank.db"
    config = WillowbankConfig(database={"path": str(target)})

    assert get_database_path(config) == target
    assert target.parent.is_dir()
