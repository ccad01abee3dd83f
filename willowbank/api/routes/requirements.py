# willowbank/api/routes/requirements.py
"""Routes for /api/requirements."""

from fastapi import APIRouter

from willowbank.api.deps import JsonBody, RecordId, StoreDep
from willowbank.models.responses import ok
from willowbank.services import requirements

router = APIRouter(prefix="/api/requirements", tags=["requirements"])


@router.get("")
async def list_requirements(
    store: StoreDep,
    category: str | None = None,
    completed: str | None = None,
    search: str | None = None,
) -> dict:
    """List requirements grouped by category."""
    grouped, total = await requirements.list_requirements(store, category, completed, search)
    return ok(data=grouped, total=total)


@router.post("/reorder")
async def reorder_requirements(store: StoreDep, payload: JsonBody) -> dict:
    """Rewrite priorities within one category from {category, orderedIds}."""
    updated = await requirements.reorder_requirements(store, payload)
    return ok(data={"updated": updated}, message="Requirements reordered successfully")


@router.get("/{requirement_id}")
async def get_requirement(store: StoreDep, requirement_id: RecordId) -> dict:
    return ok(data=await requirements.get_requirement(store, requirement_id))


@router.post("", status_code=201)
async def create_requirement(store: StoreDep, payload: JsonBody) -> dict:
    record = await requirements.create_requirement(store, payload)
    return ok(data=record, message="Requirement created successfully")


@router.put("/{requirement_id}")
async def update_requirement(store: StoreDep, requirement_id: RecordId, payload: JsonBody) -> dict:
    record = await requirements.update_requirement(store, requirement_id, payload)
    return ok(data=record, message="Requirement updated successfully")


@router.delete("/{requirement_id}")
async def delete_requirement(store: StoreDep, requirement_id: RecordId) -> dict:
    await requirements.delete_requirement(store, requirement_id)
    return ok(message="Requirement deleted successfully")
