# willowbank/services/phases.py
"""
Phases and phase tasks service.

Phases are ordered globally by order_index (0-based). Tasks belong to one
phase, are ordered by order_index within it, and are always looked up
scoped by their owning phase. Deleting a phase removes its tasks through
the store's ON DELETE CASCADE.
"""

import logging
from collections import defaultdict
from typing import Any

from willowbank.errors import NotFound
from willowbank.models.records import to_record
from willowbank.models.requests import (
    PhaseCreate,
    PhaseUpdate,
    ReorderRequest,
    TaskCreate,
    TaskUpdate,
)
from willowbank.models.store import RecordStore
from willowbank.services.ordering import reorder_rows
from willowbank.services.updates import UpdateStatement, build_insert
from willowbank.validation.sanitize import validate_payload

logger = logging.getLogger(__name__)

PHASES_TABLE = "phases"
TASKS_TABLE = "phase_tasks"
BOOL_FIELDS = frozenset({"completed"})

PHASE_UPDATE = UpdateStatement(
    table=PHASES_TABLE,
    columns=(
        "title",
        "description",
        "start_month",
        "end_month",
        "order_index",
        "color",
        "icon",
        "completed",
    ),
    bool_columns=BOOL_FIELDS,
)

TASK_UPDATE = UpdateStatement(
    table=TASKS_TABLE,
    columns=("description", "completed", "order_index", "notes"),
    bool_columns=BOOL_FIELDS,
    key_columns=("id", "phase_id"),
)


async def _tasks_for(store: RecordStore, phase_id: int) -> list[dict[str, Any]]:
    rows = await store.fetch_all(
        f"SELECT * FROM {TASKS_TABLE} WHERE phase_id = ? ORDER BY order_index, created_at",
        (phase_id,),
    )
    return [to_record(row, BOOL_FIELDS) for row in rows]


async def _require_phase(store: RecordStore, phase_id: int) -> dict[str, Any]:
    row = await store.fetch_one(f"SELECT * FROM {PHASES_TABLE} WHERE id = ?", (phase_id,))
    if row is None:
        raise NotFound("Phase not found")
    return to_record(row, BOOL_FIELDS)


async def _require_task(store: RecordStore, phase_id: int, task_id: int) -> dict[str, Any]:
    row = await store.fetch_one(
        f"SELECT * FROM {TASKS_TABLE} WHERE id = ? AND phase_id = ?", (task_id, phase_id)
    )
    if row is None:
        raise NotFound("Task not found in this phase")
    return to_record(row, BOOL_FIELDS)


async def list_phases(store: RecordStore) -> list[dict[str, Any]]:
    """
    List every phase with its tasks.

    Returns:
        Phases ordered by order_index, each with a "tasks" list
    """
    phases = [
        to_record(row, BOOL_FIELDS)
        for row in await store.fetch_all(
            f"SELECT * FROM {PHASES_TABLE} ORDER BY order_index, created_at"
        )
    ]
    task_rows = await store.fetch_all(
        f"SELECT * FROM {TASKS_TABLE} ORDER BY phase_id, order_index, created_at"
    )

    tasks_by_phase: dict[int, list[dict[str, Any]]] = defaultdict(list)
    for row in task_rows:
        tasks_by_phase[row["phase_id"]].append(to_record(row, BOOL_FIELDS))

    for phase in phases:
        phase["tasks"] = tasks_by_phase.get(phase["id"], [])
    return phases


async def get_phase(store: RecordStore, phase_id: int) -> dict[str, Any]:
    """
    Get a phase with its current task list.

    Raises:
        NotFound: If no phase has this id
    """
    phase = await _require_phase(store, phase_id)
    phase["tasks"] = await _tasks_for(store, phase_id)
    return phase


async def create_phase(store: RecordStore, payload: Any) -> dict[str, Any]:
    model = validate_payload(PhaseCreate, payload)
    sql, args = build_insert(PHASES_TABLE, model.model_dump(mode="json"), BOOL_FIELDS)
    result = await store.execute(sql, args)

    logger.info(f"Created phase {result.last_row_id}: {model.title}")
    phase = await _require_phase(store, result.last_row_id)
    phase["tasks"] = []
    return phase


async def update_phase(store: RecordStore, phase_id: int, payload: Any) -> dict[str, Any]:
    """
    Apply a partial update and return the re-fetched phase with its tasks.

    Raises:
        BadInput: If the body fails validation or sets no field
        NotFound: If no phase has this id
    """
    changes = validate_payload(PhaseUpdate, payload).changes()
    sql, args = PHASE_UPDATE.build(changes, (phase_id,))

    await _require_phase(store, phase_id)
    await store.execute(sql, args)

    logger.info(f"Updated phase {phase_id}: {list(changes)}")
    return await get_phase(store, phase_id)


async def delete_phase(store: RecordStore, phase_id: int) -> int:
    """
    Delete a phase. Its tasks are removed by the store's cascade.

    Returns:
        Number of tasks the phase owned

    Raises:
        NotFound: If no phase has this id
    """
    await _require_phase(store, phase_id)
    counted = await store.fetch_one(
        f"SELECT COUNT(*) AS count FROM {TASKS_TABLE} WHERE phase_id = ?", (phase_id,)
    )
    await store.execute(f"DELETE FROM {PHASES_TABLE} WHERE id = ?", (phase_id,))

    task_count = counted["count"] if counted else 0
    logger.info(f"Deleted phase {phase_id} with {task_count} task(s)")
    return task_count


async def reorder_phases(store: RecordStore, payload: Any) -> int:
    """
    Rewrite order_index so phases follow orderedIds (0-based).

    Returns:
        Number of phases updated
    """
    request = validate_payload(ReorderRequest, payload)
    return await reorder_rows(store, PHASES_TABLE, "order_index", request.ordered_ids)


# Tasks


async def add_task(store: RecordStore, phase_id: int, payload: Any) -> dict[str, Any]:
    """
    Add a task to a phase.

    Raises:
        BadInput: If the body fails validation
        NotFound: If no phase has this id
    """
    model = validate_payload(TaskCreate, payload)
    await _require_phase(store, phase_id)

    values = {"phase_id": phase_id, **model.model_dump(mode="json")}
    sql, args = build_insert(TASKS_TABLE, values, BOOL_FIELDS)
    result = await store.execute(sql, args)

    logger.info(f"Added task {result.last_row_id} to phase {phase_id}")
    return await _require_task(store, phase_id, result.last_row_id)


async def update_task(
    store: RecordStore, phase_id: int, task_id: int, payload: Any
) -> dict[str, Any]:
    """
    Apply a partial update to a task of a phase.

    Raises:
        BadInput: If the body fails validation or sets no field
        NotFound: If the task does not exist in this phase
    """
    changes = validate_payload(TaskUpdate, payload).changes()
    sql, args = TASK_UPDATE.build(changes, (task_id, phase_id))

    await _require_task(store, phase_id, task_id)
    await store.execute(sql, args)

    logger.info(f"Updated task {task_id} of phase {phase_id}: {list(changes)}")
    return await _require_task(store, phase_id, task_id)


async def delete_task(store: RecordStore, phase_id: int, task_id: int) -> None:
    await _require_task(store, phase_id, task_id)
    await store.execute(
        f"DELETE FROM {TASKS_TABLE} WHERE id = ? AND phase_id = ?", (task_id, phase_id)
    )
    logger.info(f"Deleted task {task_id} of phase {phase_id}")


async def reorder_tasks(store: RecordStore, phase_id: int, payload: Any) -> int:
    """
    Rewrite order_index of one phase's tasks to follow orderedIds (0-based).

    Ids of tasks owned by another phase are not updated.

    Raises:
        NotFound: If no phase has this id
    """
    request = validate_payload(ReorderRequest, payload)
    await _require_phase(store, phase_id)
    return await reorder_rows(
        store, TASKS_TABLE, "order_index", request.ordered_ids, scope=("phase_id", phase_id)
    )
