"""HTTP client for the willowbank API."""

from .api import (
    ApiClientError,
    ComplianceApi,
    PhasesApi,
    PlantsApi,
    RequirementsApi,
    WillowbankClient,
)

__all__ = [
    "WillowbankClient",
    "ApiClientError",
    "RequirementsApi",
    "PhasesApi",
    "PlantsApi",
    "ComplianceApi",
]
