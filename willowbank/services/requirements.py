# willowbank/services/requirements.py
"""
Requirements service.

Requirements are ordered by priority within their category. Reordering is
scoped to one category and writes 1-based priorities.
"""

import logging
from typing import Any

from willowbank.errors import NotFound
from willowbank.models.records import RequirementCategory, group_by, to_record
from willowbank.models.requests import (
    RequirementCreate,
    RequirementReorderRequest,
    RequirementUpdate,
)
from willowbank.models.store import RecordStore
from willowbank.services.ordering import reorder_rows
from willowbank.services.updates import UpdateStatement, build_insert
from willowbank.validation.sanitize import (
    like_pattern,
    parse_bool_flag,
    parse_enum_filter,
    sanitize_search,
    validate_payload,
)

logger = logging.getLogger(__name__)

TABLE = "requirements"
BOOL_FIELDS = frozenset({"completed"})

UPDATE = UpdateStatement(
    table=TABLE,
    columns=("category", "description", "priority", "completed", "notes"),
    bool_columns=BOOL_FIELDS,
)


async def _fetch(store: RecordStore, requirement_id: int) -> dict[str, Any] | None:
    row = await store.fetch_one(f"SELECT * FROM {TABLE} WHERE id = ?", (requirement_id,))
    return to_record(row, BOOL_FIELDS)


async def list_requirements(
    store: RecordStore,
    category: str | None = None,
    completed: str | None = None,
    search: str | None = None,
) -> tuple[dict[str, list[dict[str, Any]]], int]:
    """
    List requirements grouped by category.

    Args:
        store: Record store
        category: Optional category filter
        completed: Optional boolean flag ("true"/"false")
        search: Optional substring matched against description and notes

    Returns:
        (grouped, total) where grouped has a key for every category
    """
    category_filter = parse_enum_filter("category", category, RequirementCategory)
    completed_filter = parse_bool_flag("completed", completed)
    term = sanitize_search(search)

    clauses = []
    args: list[Any] = []
    if category_filter is not None:
        clauses.append("category = ?")
        args.append(category_filter.value)
    if completed_filter is not None:
        clauses.append("completed = ?")
        args.append(1 if completed_filter else 0)
    if term is not None:
        clauses.append("(description LIKE ? ESCAPE '\\' OR notes LIKE ? ESCAPE '\\')")
        args.extend([like_pattern(term), like_pattern(term)])

    sql = f"SELECT * FROM {TABLE}"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY category, priority, created_at"

    rows = await store.fetch_all(sql, args)
    records = [to_record(row, BOOL_FIELDS) for row in rows]

    return group_by(records, "category", RequirementCategory), len(records)


async def get_requirement(store: RecordStore, requirement_id: int) -> dict[str, Any]:
    """
    Get a requirement by id.

    Raises:
        NotFound: If no requirement has this id
    """
    record = await _fetch(store, requirement_id)
    if record is None:
        raise NotFound("Requirement not found")
    return record


async def create_requirement(store: RecordStore, payload: Any) -> dict[str, Any]:
    """
    Create a requirement from a request body.

    Raises:
        BadInput: If the body fails validation
    """
    model = validate_payload(RequirementCreate, payload)
    sql, args = build_insert(TABLE, model.model_dump(mode="json"), BOOL_FIELDS)
    result = await store.execute(sql, args)

    logger.info(f"Created requirement {result.last_row_id} in {model.category.value}")
    return await get_requirement(store, result.last_row_id)


async def update_requirement(
    store: RecordStore, requirement_id: int, payload: Any
) -> dict[str, Any]:
    """
    Apply a partial update and return the re-fetched requirement.

    Raises:
        BadInput: If the body fails validation or sets no field
        NotFound: If no requirement has this id
    """
    changes = validate_payload(RequirementUpdate, payload).changes()
    sql, args = UPDATE.build(changes, (requirement_id,))

    await get_requirement(store, requirement_id)
    await store.execute(sql, args)

    logger.info(f"Updated requirement {requirement_id}: {list(changes)}")
    return await get_requirement(store, requirement_id)


async def delete_requirement(store: RecordStore, requirement_id: int) -> None:
    """
    Delete a requirement.

    Raises:
        NotFound: If no requirement has this id
    """
    await get_requirement(store, requirement_id)
    await store.execute(f"DELETE FROM {TABLE} WHERE id = ?", (requirement_id,))
    logger.info(f"Deleted requirement {requirement_id}")


async def reorder_requirements(store: RecordStore, payload: Any) -> int:
    """
    Rewrite priorities within one category to follow orderedIds (1-based).

    Ids belonging to another category are not updated.

    Returns:
        Number of requirements updated
    """
    request = validate_payload(RequirementReorderRequest, payload)
    return await reorder_rows(
        store,
        TABLE,
        "priority",
        request.ordered_ids,
        start=1,
        scope=("category", request.category.value),
    )
