"""
Data models for willowbank.

Provides the record store, closed enumerations, request models and the
response envelope.
"""

from willowbank.models.records import (
    ComplianceStatus,
    ComplianceType,
    FoliageType,
    PlantCategory,
    RequirementCategory,
    SunRequirements,
    WaterNeeds,
)
from willowbank.models.responses import ApiResponse, HealthResponse
from willowbank.models.sqlite_store import SQLiteRecordStore
from willowbank.models.store import ExecuteResult, RecordStore

__all__ = [
    # Store
    "RecordStore",
    "SQLiteRecordStore",
    "ExecuteResult",
    # Enumerations
    "RequirementCategory",
    "PlantCategory",
    "WaterNeeds",
    "SunRequirements",
    "FoliageType",
    "ComplianceType",
    "ComplianceStatus",
    # Responses
    "ApiResponse",
    "HealthResponse",
]
