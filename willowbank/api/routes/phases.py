# willowbank/api/routes/phases.py
"""Routes for /api/phases and the nested task routes."""

from fastapi import APIRouter

from willowbank.api.deps import JsonBody, RecordId, StoreDep
from willowbank.models.responses import ok
from willowbank.services import phases

router = APIRouter(prefix="/api/phases", tags=["phases"])


@router.get("")
async def list_phases(store: StoreDep) -> dict:
    """List phases in order, each with its tasks."""
    records = await phases.list_phases(store)
    return ok(data=records, total=len(records))


@router.post("/reorder")
async def reorder_phases(store: StoreDep, payload: JsonBody) -> dict:
    updated = await phases.reorder_phases(store, payload)
    return ok(data={"updated": updated}, message="Phases reordered successfully")


@router.get("/{phase_id}")
async def get_phase(store: StoreDep, phase_id: RecordId) -> dict:
    return ok(data=await phases.get_phase(store, phase_id))


@router.post("", status_code=201)
async def create_phase(store: StoreDep, payload: JsonBody) -> dict:
    record = await phases.create_phase(store, payload)
    return ok(data=record, message="Phase created successfully")


@router.put("/{phase_id}")
async def update_phase(store: StoreDep, phase_id: RecordId, payload: JsonBody) -> dict:
    record = await phases.update_phase(store, phase_id, payload)
    return ok(data=record, message="Phase updated successfully")


@router.delete("/{phase_id}")
async def delete_phase(store: StoreDep, phase_id: RecordId) -> dict:
    task_count = await phases.delete_phase(store, phase_id)
    return ok(
        data={"tasks_deleted": task_count},
        message="Phase and all associated tasks deleted successfully",
    )


# Tasks


@router.post("/{phase_id}/tasks", status_code=201)
async def add_task(store: StoreDep, phase_id: RecordId, payload: JsonBody) -> dict:
    record = await phases.add_task(store, phase_id, payload)
    return ok(data=record, message="Task added to phase successfully")


@router.post("/{phase_id}/tasks/reorder")
async def reorder_tasks(store: StoreDep, phase_id: RecordId, payload: JsonBody) -> dict:
    updated = await phases.reorder_tasks(store, phase_id, payload)
    return ok(data={"updated": updated}, message="Tasks reordered successfully")


@router.put("/{phase_id}/tasks/{task_id}")
async def update_task(
    store: StoreDep, phase_id: RecordId, task_id: RecordId, payload: JsonBody
) -> dict:
    record = await phases.update_task(store, phase_id, task_id, payload)
    return ok(data=record, message="Task updated successfully")


@router.delete("/{phase_id}/tasks/{task_id}")
async def delete_task(store: StoreDep, phase_id: RecordId, task_id: RecordId) -> dict:
    await phases.delete_task(store, phase_id, task_id)
    return ok(message="Task deleted successfully")
