# willowbank/services/compliance.py
"""
Compliance requirements service (setbacks, water budgets, permits, ...).
"""

import logging
from typing import Any

from willowbank.errors import NotFound
from willowbank.models.records import ComplianceStatus, ComplianceType, group_by, to_record
from willowbank.models.requests import ComplianceCreate, ComplianceUpdate
from willowbank.models.store import RecordStore
from willowbank.services.updates import UpdateStatement, build_insert
from willowbank.validation.sanitize import parse_enum_filter, sanitize_search, validate_payload

logger = logging.getLogger(__name__)

TABLE = "compliance_requirements"

UPDATE = UpdateStatement(table=TABLE, columns=tuple(ComplianceUpdate.model_fields))


async def list_compliance(
    store: RecordStore,
    requirement_type: str | None = None,
    status: str | None = None,
    jurisdiction: str | None = None,
) -> tuple[dict[str, list[dict[str, Any]]], int]:
    """
    List compliance requirements grouped by requirement type.

    Args:
        store: Record store
        requirement_type: Optional type filter
        status: Optional status filter
        jurisdiction: Optional exact jurisdiction (case-insensitive)

    Returns:
        (grouped, total) where grouped has a key for every requirement type
    """
    type_filter = parse_enum_filter("type", requirement_type, ComplianceType)
    status_filter = parse_enum_filter("status", status, ComplianceStatus)
    jurisdiction_filter = sanitize_search(jurisdiction)

    clauses = []
    args: list[Any] = []
    if type_filter is not None:
        clauses.append("requirement_type = ?")
        args.append(type_filter.value)
    if status_filter is not None:
        clauses.append("status = ?")
        args.append(status_filter.value)
    if jurisdiction_filter is not None:
        clauses.append("jurisdiction = ? COLLATE NOCASE")
        args.append(jurisdiction_filter)

    sql = f"SELECT * FROM {TABLE}"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY requirement_type, title"

    records = [to_record(row, frozenset()) for row in await store.fetch_all(sql, args)]
    return group_by(records, "requirement_type", ComplianceType), len(records)


async def get_compliance(store: RecordStore, compliance_id: int) -> dict[str, Any]:
    row = await store.fetch_one(f"SELECT * FROM {TABLE} WHERE id = ?", (compliance_id,))
    if row is None:
        raise NotFound("Compliance requirement not found")
    return dict(row)


async def create_compliance(store: RecordStore, payload: Any) -> dict[str, Any]:
    model = validate_payload(ComplianceCreate, payload)
    sql, args = build_insert(TABLE, model.model_dump(mode="json"))
    result = await store.execute(sql, args)

    logger.info(f"Created compliance requirement {result.last_row_id}: {model.title}")
    return await get_compliance(store, result.last_row_id)


async def update_compliance(
    store: RecordStore, compliance_id: int, payload: Any
) -> dict[str, Any]:
    changes = validate_payload(ComplianceUpdate, payload).changes()
    sql, args = UPDATE.build(changes, (compliance_id,))

    await get_compliance(store, compliance_id)
    await store.execute(sql, args)

    logger.info(f"Updated compliance requirement {compliance_id}: {list(changes)}")
    return await get_compliance(store, compliance_id)


async def delete_compliance(store: RecordStore, compliance_id: int) -> None:
    await get_compliance(store, compliance_id)
    await store.execute(f"DELETE FROM {TABLE} WHERE id = ?", (compliance_id,))
    logger.info(f"Deleted compliance requirement {compliance_id}")
