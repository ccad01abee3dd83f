# willowbank/config/schema.py
"""
Pydantic configuration models for willowbank.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from pydantic import BaseModel, ConfigDict, Field

from willowbank import __version__


class DatabaseConfig(BaseModel):
    """SQLite store configuration."""

    model_config = ConfigDict(extra="ignore")

    path: str | None = Field(
        default=None,
        description="Path to the SQLite database file (None = user data dir)",
    )
    seed_defaults: bool = Field(
        default=True, description="Seed default requirements into an empty store"
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="ignore")

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3001, ge=1, le=65535, description="Listening port")
    cors_origin: str = Field(
        default="http://localhost:3000",
        description="Allowed cross-origin caller (the frontend URL)",
    )


class WillowbankConfig(BaseModel):
    """Root configuration for willowbank."""

    model_config = ConfigDict(extra="ignore")

    environment: str = Field(
        default="development",
        description="Runtime environment name; production hides 5xx error details",
    )
    version: str = Field(default=__version__, description="Version reported by /health")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
