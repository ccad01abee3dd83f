# willowbank/models/responses.py
"""
Pydantic response models for the HTTP API.

Every route answers with the same envelope so the client can unwrap it
uniformly.
"""

from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Uniform response envelope."""

    success: bool = Field(description="Whether the request succeeded")
    data: Any | None = Field(default=None, description="Resource payload")
    error: str | None = Field(default=None, description="Error message on failure")
    message: str | None = Field(default=None, description="Human-readable confirmation")
    total: int | None = Field(default=None, description="Record count for list responses")
    filters: dict[str, list[str]] | None = Field(
        default=None, description="Available filter values (plant listings)"
    )
    path: str | None = Field(default=None, description="Request path for non-2xx responses")
    timestamp: str | None = Field(default=None, description="Server time for 5xx responses")

    def to_dict(self) -> dict[str, Any]:
        """Dump without the top-level keys that were not set."""
        # Only envelope keys are dropped; null fields inside data are kept
        return {key: value for key, value in self.model_dump().items() if value is not None}


class HealthResponse(BaseModel):
    """Response from the liveness endpoint."""

    status: str = Field(default="healthy", description="Liveness status")
    timestamp: str = Field(description="Server time (ISO format)")
    version: str = Field(description="Application version")


def ok(
    data: Any = None,
    message: str | None = None,
    total: int | None = None,
    filters: dict[str, list[str]] | None = None,
) -> dict[str, Any]:
    """Build a success envelope."""
    return ApiResponse(
        success=True, data=data, message=message, total=total, filters=filters
    ).to_dict()
