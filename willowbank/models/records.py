# willowbank/models/records.py
"""
Closed enumerations and row conversion helpers for the stored entities.
"""

from enum import Enum
from typing import Any


class RequirementCategory(str, Enum):
    """Requirement buckets, in display order."""

    NEEDS = "needs"
    WANTS = "wants"
    NICE_TO_HAVES = "nice-to-haves"


class PlantCategory(str, Enum):
    PRIVACY = "privacy"
    POLLINATORS = "pollinators"
    VEGETABLES = "vegetables"
    WILDLIFE = "wildlife"
    TREES = "trees"
    GROUNDCOVER = "groundcover"


class WaterNeeds(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SunRequirements(str, Enum):
    FULL_SUN = "full-sun"
    PARTIAL_SUN = "partial-sun"
    SHADE = "shade"


class FoliageType(str, Enum):
    DECIDUOUS = "deciduous"
    EVERGREEN = "evergreen"
    SEMI_EVERGREEN = "semi-evergreen"


class ComplianceType(str, Enum):
    SETBACK = "setback"
    WATER = "water"
    FENCE = "fence"
    PLANT = "plant"
    PERMIT = "permit"


class ComplianceStatus(str, Enum):
    ACTIVE = "active"
    DEPRECATED = "deprecated"
    PENDING = "pending"


DEFAULT_JURISDICTION = "Yolo County"

# Largest value a SQLite INTEGER column can hold
MAX_INTEGER = 2**63 - 1


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Return the string values of an enumeration, in declaration order."""
    return [member.value for member in enum_cls]


def to_record(row: dict[str, Any] | None, bool_fields: frozenset[str]) -> dict[str, Any] | None:
    """
    Convert a stored row into an API record.

    SQLite keeps booleans as 0/1; the API exposes them as true/false.

    Args:
        row: Row mapping from the store (or None)
        bool_fields: Column names holding booleans

    Returns:
        New dict with boolean columns coerced, or None if row is None
    """
    if row is None:
        return None

    record = dict(row)
    for name in bool_fields:
        if name in record and record[name] is not None:
            record[name] = bool(record[name])
    return record


def group_by(
    records: list[dict[str, Any]], key: str, enum_cls: type[Enum]
) -> dict[str, list[dict[str, Any]]]:
    """
    Group records into a map keyed by every value of an enumeration.

    Keys with no matching records are present with an empty list.
    """
    grouped: dict[str, list[dict[str, Any]]] = {value: [] for value in enum_values(enum_cls)}
    for record in records:
        bucket = grouped.get(record.get(key))
        if bucket is not None:
            bucket.append(record)
    return grouped
