# willowbank/services/ordering.py
"""
Reordering of ordering-key columns.

The caller supplies the desired final order as a list of ids. Each position
is written with its own UPDATE statement, committed independently:

    - Ids not in the list keep their current value.
    - A duplicated id ends with the last position written for it.
    - Ids outside the scope (category, owning phase) match no row and are
      left unchanged.
    - A store failure at element k leaves elements 0..k-1 written and
      propagates. There is no rollback.
"""

import logging
from collections.abc import Sequence

from willowbank.models.store import RecordStore
from willowbank.services.updates import utc_now

logger = logging.getLogger(__name__)


async def reorder_rows(
    store: RecordStore,
    table: str,
    order_column: str,
    ordered_ids: Sequence[int],
    start: int = 0,
    scope: tuple[str, object] | None = None,
) -> int:
    """
    Rewrite order_column so each listed id takes its list position.

    Args:
        store: Record store
        table: Table name (trusted, from the calling service)
        order_column: Ordering-key column (trusted, from the calling service)
        ordered_ids: Ids in desired order
        start: Value written for the first position (0 or 1)
        scope: Optional (column, value) restricting which rows may match

    Returns:
        Number of rows actually updated

    Raises:
        StoreError: If any statement fails (earlier statements stay applied)
    """
    sql = f"UPDATE {table} SET {order_column} = ?, updated_at = ? WHERE id = ?"
    if scope is not None:
        sql += f" AND {scope[0]} = ?"

    updated = 0
    for position, record_id in enumerate(ordered_ids, start=start):
        args: list[object] = [position, utc_now(), record_id]
        if scope is not None:
            args.append(scope[1])

        result = await store.execute(sql, args)
        if result.row_count == 0:
            logger.info(f"Reorder of {table}: id {record_id} matched no row (skipped)")
        updated += result.row_count

    logger.info(f"Reordered {table}: {updated} of {len(ordered_ids)} row(s) updated")
    return updated
