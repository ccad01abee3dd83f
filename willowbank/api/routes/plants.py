# willowbank/api/routes/plants.py
"""Routes for /api/plants."""

from fastapi import APIRouter

from willowbank.api.deps import JsonBody, RecordId, StoreDep
from willowbank.models.responses import ok
from willowbank.services import plants

router = APIRouter(prefix="/api/plants", tags=["plants"])


@router.get("")
async def list_plants(
    store: StoreDep,
    category: str | None = None,
    water_needs: str | None = None,
    sun_requirements: str | None = None,
    foliage_type: str | None = None,
    native: str | None = None,
    drought_tolerant: str | None = None,
    recommended: str | None = None,
    search: str | None = None,
) -> dict:
    """List plants matching every filter, grouped by category."""
    grouped, total = await plants.list_plants(
        store,
        category=category,
        water_needs=water_needs,
        sun_requirements=sun_requirements,
        foliage_type=foliage_type,
        native=native,
        drought_tolerant=drought_tolerant,
        recommended=recommended,
        search=search,
    )
    return ok(data=grouped, total=total, filters=plants.FILTER_OPTIONS)


@router.get("/recommended")
async def list_recommended(store: StoreDep) -> dict:
    records = await plants.list_flagged(store, "recommended")
    return ok(data=records, total=len(records))


@router.get("/native")
async def list_native(store: StoreDep) -> dict:
    records = await plants.list_flagged(store, "native")
    return ok(data=records, total=len(records))


@router.post("/seed")
async def seed_plants(store: StoreDep) -> dict:
    """Seed the default catalogue into an empty plants table."""
    total = await plants.seed_plants(store)
    return ok(data={"plantsAdded": total}, message=f"Successfully seeded {total} plants")


@router.post("/seed/force")
async def reseed_plants(store: StoreDep) -> dict:
    """Replace every plant with the default catalogue."""
    total = await plants.seed_plants(store, force=True)
    return ok(data={"plantsAdded": total}, message=f"Successfully reseeded {total} plants")


@router.get("/{plant_id}")
async def get_plant(store: StoreDep, plant_id: RecordId) -> dict:
    return ok(data=await plants.get_plant(store, plant_id))


@router.post("", status_code=201)
async def create_plant(store: StoreDep, payload: JsonBody) -> dict:
    record = await plants.create_plant(store, payload)
    return ok(data=record, message="Plant created successfully")


@router.put("/{plant_id}")
async def update_plant(store: StoreDep, plant_id: RecordId, payload: JsonBody) -> dict:
    record = await plants.update_plant(store, plant_id, payload)
    return ok(data=record, message="Plant updated successfully")


@router.delete("/{plant_id}")
async def delete_plant(store: StoreDep, plant_id: RecordId) -> dict:
    await plants.delete_plant(store, plant_id)
    return ok(message="Plant deleted successfully")
