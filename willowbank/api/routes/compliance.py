# willowbank/api/routes/compliance.py
"""Routes for /api/compliance."""

from fastapi import APIRouter, Query

from willowbank.api.deps import JsonBody, RecordId, StoreDep
from willowbank.models.responses import ok
from willowbank.services import compliance

router = APIRouter(prefix="/api/compliance", tags=["compliance"])


@router.get("")
async def list_compliance(
    store: StoreDep,
    requirement_type: str | None = Query(default=None, alias="type"),
    status: str | None = None,
    jurisdiction: str | None = None,
) -> dict:
    """List compliance requirements grouped by type."""
    grouped, total = await compliance.list_compliance(
        store, requirement_type, status, jurisdiction
    )
    return ok(data=grouped, total=total)


@router.get("/{compliance_id}")
async def get_compliance(store: StoreDep, compliance_id: RecordId) -> dict:
    return ok(data=await compliance.get_compliance(store, compliance_id))


@router.post("", status_code=201)
async def create_compliance(store: StoreDep, payload: JsonBody) -> dict:
    record = await compliance.create_compliance(store, payload)
    return ok(data=record, message="Compliance requirement created successfully")


@router.put("/{compliance_id}")
async def update_compliance(store: StoreDep, compliance_id: RecordId, payload: JsonBody) -> dict:
    record = await compliance.update_compliance(store, compliance_id, payload)
    return ok(data=record, message="Compliance requirement updated successfully")


@router.delete("/{compliance_id}")
async def delete_compliance(store: StoreDep, compliance_id: RecordId) -> dict:
    await compliance.delete_compliance(store, compliance_id)
    return ok(message="Compliance requirement deleted successfully")
