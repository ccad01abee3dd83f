# willowbank/services/plants.py
"""
Plant catalogue service.

Plants carry no ordering key; listings sort by category then common name.
"""

import logging
from typing import Any

from willowbank.errors import BadInput, NotFound
from willowbank.models.records import (
    FoliageType,
    PlantCategory,
    SunRequirements,
    WaterNeeds,
    enum_values,
    group_by,
    to_record,
)
from willowbank.models.requests import PlantCreate, PlantUpdate
from willowbank.models.store import RecordStore
from willowbank.services.seed import DEFAULT_PLANTS
from willowbank.services.updates import UpdateStatement, build_insert
from willowbank.validation.sanitize import (
    like_pattern,
    parse_bool_flag,
    parse_enum_filter,
    sanitize_search,
    validate_payload,
)

logger = logging.getLogger(__name__)

TABLE = "plants"
BOOL_FIELDS = frozenset({"native", "drought_tolerant", "recommended"})
ORDER_BY = "ORDER BY category, common_name"

UPDATE = UpdateStatement(
    table=TABLE,
    columns=tuple(PlantUpdate.model_fields),
    bool_columns=BOOL_FIELDS,
)

# Enumerations advertised to clients alongside listings
FILTER_OPTIONS = {
    "categories": enum_values(PlantCategory),
    "water_needs": enum_values(WaterNeeds),
    "sun_requirements": enum_values(SunRequirements),
    "foliage_types": enum_values(FoliageType),
}


async def list_plants(
    store: RecordStore,
    category: str | None = None,
    water_needs: str | None = None,
    sun_requirements: str | None = None,
    foliage_type: str | None = None,
    native: str | None = None,
    drought_tolerant: str | None = None,
    recommended: str | None = None,
    search: str | None = None,
) -> tuple[dict[str, list[dict[str, Any]]], int]:
    """
    List plants matching every supplied filter, grouped by category.

    Enumerated filters reject unknown values. Boolean flags take
    true/false. search is a case-insensitive substring of the common or
    scientific name.

    Returns:
        (grouped, total) where grouped has a key for every plant category
    """
    enum_filters = {
        "category": parse_enum_filter("category", category, PlantCategory),
        "water_needs": parse_enum_filter("water_needs", water_needs, WaterNeeds),
        "sun_requirements": parse_enum_filter(
            "sun_requirements", sun_requirements, SunRequirements
        ),
        "foliage_type": parse_enum_filter("foliage_type", foliage_type, FoliageType),
    }
    flag_filters = {
        "native": parse_bool_flag("native", native),
        "drought_tolerant": parse_bool_flag("drought_tolerant", drought_tolerant),
        "recommended": parse_bool_flag("recommended", recommended),
    }
    term = sanitize_search(search)

    clauses = []
    args: list[Any] = []
    for column, value in enum_filters.items():
        if value is not None:
            clauses.append(f"{column} = ?")
            args.append(value.value)
    for column, flag in flag_filters.items():
        if flag is not None:
            clauses.append(f"{column} = ?")
            args.append(1 if flag else 0)
    if term is not None:
        clauses.append("(common_name LIKE ? ESCAPE '\\' OR scientific_name LIKE ? ESCAPE '\\')")
        args.extend([like_pattern(term), like_pattern(term)])

    sql = f"SELECT * FROM {TABLE}"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += f" {ORDER_BY}"

    rows = await store.fetch_all(sql, args)
    records = [to_record(row, BOOL_FIELDS) for row in rows]

    return group_by(records, "category", PlantCategory), len(records)


async def list_flagged(store: RecordStore, flag: str) -> list[dict[str, Any]]:
    """
    Flat list of plants with a boolean flag set ("recommended" or "native").
    """
    if flag not in ("recommended", "native"):
        raise ValueError(f"Unsupported plant flag: {flag}")

    rows = await store.fetch_all(f"SELECT * FROM {TABLE} WHERE {flag} = 1 {ORDER_BY}")
    return [to_record(row, BOOL_FIELDS) for row in rows]


async def get_plant(store: RecordStore, plant_id: int) -> dict[str, Any]:
    row = await store.fetch_one(f"SELECT * FROM {TABLE} WHERE id = ?", (plant_id,))
    if row is None:
        raise NotFound("Plant not found")
    return to_record(row, BOOL_FIELDS)


async def create_plant(store: RecordStore, payload: Any) -> dict[str, Any]:
    model = validate_payload(PlantCreate, payload)
    sql, args = build_insert(TABLE, model.model_dump(mode="json"), BOOL_FIELDS)
    result = await store.execute(sql, args)

    logger.info(f"Created plant {result.last_row_id}: {model.common_name}")
    return await get_plant(store, result.last_row_id)


async def update_plant(store: RecordStore, plant_id: int, payload: Any) -> dict[str, Any]:
    """
    Apply a partial update and return the re-fetched plant.

    Raises:
        BadInput: If the body fails validation or sets no field
        NotFound: If no plant has this id
    """
    changes = validate_payload(PlantUpdate, payload).changes()
    sql, args = UPDATE.build(changes, (plant_id,))

    await get_plant(store, plant_id)
    await store.execute(sql, args)

    logger.info(f"Updated plant {plant_id}: {list(changes)}")
    return await get_plant(store, plant_id)


async def delete_plant(store: RecordStore, plant_id: int) -> None:
    await get_plant(store, plant_id)
    await store.execute(f"DELETE FROM {TABLE} WHERE id = ?", (plant_id,))
    logger.info(f"Deleted plant {plant_id}")


async def count_plants(store: RecordStore) -> int:
    row = await store.fetch_one(f"SELECT COUNT(*) AS count FROM {TABLE}")
    return row["count"] if row else 0


async def seed_plants(store: RecordStore, force: bool = False) -> int:
    """
    Insert the default plant catalogue.

    Args:
        store: Record store
        force: Delete every existing plant first

    Returns:
        Number of plants in the store afterwards

    Raises:
        BadInput: If plants already exist and force is False
    """
    if force:
        await store.execute(f"DELETE FROM {TABLE}")
        logger.warning("Cleared plant catalogue before reseeding")
    elif await count_plants(store) > 0:
        raise BadInput(
            "Plants database already contains data. Use /api/plants/seed/force to override."
        )

    for plant in DEFAULT_PLANTS:
        model = PlantCreate.model_validate(plant)
        sql, args = build_insert(TABLE, model.model_dump(mode="json"), BOOL_FIELDS)
        await store.execute(sql, args)

    total = await count_plants(store)
    logger.info(f"Seeded plant catalogue: {total} plant(s)")
    return total
