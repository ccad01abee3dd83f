# willowbank/models/requests.py
"""
Pydantic request models: the create and update shapes of each resource.

Create models declare required fields and defaults. Update models declare
the same whitelist with every field optional; fields the client did not send
stay unset and are excluded from the partial update.
"""

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from willowbank.models.records import (
    DEFAULT_JURISDICTION,
    MAX_INTEGER,
    ComplianceStatus,
    ComplianceType,
    FoliageType,
    PlantCategory,
    RequirementCategory,
    SunRequirements,
    WaterNeeds,
)


class RequestModel(BaseModel):
    """Base for request bodies: strings are trimmed, unknown keys rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UpdateModel(RequestModel):
    """Base for partial updates."""

    # Columns declared NOT NULL in the schema; an explicit null is rejected
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required(self) -> "UpdateModel":
        for name in self.model_fields_set & self.NON_NULLABLE:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, enums reduced to their values."""
        return self.model_dump(mode="json", exclude_unset=True)


# Requirements


class RequirementCreate(RequestModel):
    category: RequirementCategory
    description: str = Field(min_length=1, max_length=500)
    priority: int = Field(default=0, ge=0, le=MAX_INTEGER)
    completed: bool = False
    notes: str | None = Field(default=None, max_length=1000)


class RequirementUpdate(UpdateModel):
    NON_NULLABLE = frozenset({"category", "description", "priority", "completed"})

    category: RequirementCategory | None = None
    description: str | None = Field(default=None, min_length=1, max_length=500)
    priority: int | None = Field(default=None, ge=0, le=MAX_INTEGER)
    completed: bool | None = None
    notes: str | None = Field(default=None, max_length=1000)


# Phases and tasks


class PhaseCreate(RequestModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    start_month: int | None = Field(default=None, ge=1, le=12)
    end_month: int | None = Field(default=None, ge=1, le=12)
    order_index: int = Field(ge=0, le=MAX_INTEGER)
    color: str | None = Field(default=None, max_length=50)
    icon: str | None = Field(default=None, max_length=50)
    completed: bool = False


class PhaseUpdate(UpdateModel):
    NON_NULLABLE = frozenset({"title", "order_index", "completed"})

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    start_month: int | None = Field(default=None, ge=1, le=12)
    end_month: int | None = Field(default=None, ge=1, le=12)
    order_index: int | None = Field(default=None, ge=0, le=MAX_INTEGER)
    color: str | None = Field(default=None, max_length=50)
    icon: str | None = Field(default=None, max_length=50)
    completed: bool | None = None


class TaskCreate(RequestModel):
    description: str = Field(min_length=1, max_length=500)
    order_index: int = Field(ge=0, le=MAX_INTEGER)
    completed: bool = False
    notes: str | None = Field(default=None, max_length=1000)


class TaskUpdate(UpdateModel):
    NON_NULLABLE = frozenset({"description", "order_index", "completed"})

    description: str | None = Field(default=None, min_length=1, max_length=500)
    completed: bool | None = None
    order_index: int | None = Field(default=None, ge=0, le=MAX_INTEGER)
    notes: str | None = Field(default=None, max_length=1000)


# Plants


class PlantCreate(RequestModel):
    common_name: str = Field(min_length=1, max_length=200)
    scientific_name: str | None = Field(default=None, max_length=200)
    category: PlantCategory
    water_needs: WaterNeeds | None = None
    sun_requirements: SunRequirements | None = None
    mature_size: str | None = Field(default=None, max_length=100)
    bloom_time: str | None = Field(default=None, max_length=100)
    native: bool = False
    drought_tolerant: bool = False
    wildlife_value: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)
    recommended: bool = False
    image_url: str | None = Field(default=None, max_length=500)
    water_description: str | None = Field(default=None, max_length=500)
    sun_description: str | None = Field(default=None, max_length=500)
    care_instructions: str | None = Field(default=None, max_length=1500)
    hardiness_zone: str | None = Field(default=None, max_length=50)
    bloom_color: str | None = Field(default=None, max_length=100)
    foliage_type: FoliageType | None = None


class PlantUpdate(UpdateModel):
    NON_NULLABLE = frozenset(
        {"common_name", "category", "native", "drought_tolerant", "recommended"}
    )

    common_name: str | None = Field(default=None, min_length=1, max_length=200)
    scientific_name: str | None = Field(default=None, max_length=200)
    category: PlantCategory | None = None
    water_needs: WaterNeeds | None = None
    sun_requirements: SunRequirements | None = None
    mature_size: str | None = Field(default=None, max_length=100)
    bloom_time: str | None = Field(default=None, max_length=100)
    native: bool | None = None
    drought_tolerant: bool | None = None
    wildlife_value: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)
    recommended: bool | None = None
    image_url: str | None = Field(default=None, max_length=500)
    water_description: str | None = Field(default=None, max_length=500)
    sun_description: str | None = Field(default=None, max_length=500)
    care_instructions: str | None = Field(default=None, max_length=1500)
    hardiness_zone: str | None = Field(default=None, max_length=50)
    bloom_color: str | None = Field(default=None, max_length=100)
    foliage_type: FoliageType | None = None


# Compliance


class ComplianceCreate(RequestModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    requirement_type: ComplianceType
    jurisdiction: str = Field(default=DEFAULT_JURISDICTION, min_length=1, max_length=200)
    code_reference: str | None = Field(default=None, max_length=200)
    measurement: str | None = Field(default=None, max_length=200)
    status: ComplianceStatus = ComplianceStatus.ACTIVE


class ComplianceUpdate(UpdateModel):
    NON_NULLABLE = frozenset(
        {"title", "description", "requirement_type", "jurisdiction", "status"}
    )

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    requirement_type: ComplianceType | None = None
    jurisdiction: str | None = Field(default=None, min_length=1, max_length=200)
    code_reference: str | None = Field(default=None, max_length=200)
    measurement: str | None = Field(default=None, max_length=200)
    status: ComplianceStatus | None = None


# Reordering

# Ids must be JSON integers; true and "2" are not coerced
RecordIdValue = Annotated[StrictInt, Field(ge=0, le=MAX_INTEGER)]


class ReorderRequest(BaseModel):
    """Desired final order, as a list of existing ids."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    ordered_ids: list[RecordIdValue] = Field(alias="orderedIds")


class RequirementReorderRequest(ReorderRequest):
    category: RequirementCategory
