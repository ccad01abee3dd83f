# willowbank/services/updates.py
"""
Whitelist-driven statement builders for inserts and partial updates.

Column names in generated SQL only ever come from a resource's static
whitelist. Client-supplied keys select which whitelisted columns are set;
they are never concatenated into a statement.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from willowbank.errors import BadInput

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string (microsecond precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def to_store_value(column: str, value: Any, bool_columns: frozenset[str]) -> Any:
    """Coerce an API value to its stored form (booleans become 0/1)."""
    if column in bool_columns and value is not None:
        return 1 if value else 0
    return value


@dataclass(frozen=True)
class UpdateStatement:
    """
    Partial-update builder for one table.

    Attributes:
        table: Table name
        columns: Whitelisted updatable columns, in statement order
        bool_columns: Columns stored as 0/1
        key_columns: Columns identifying the target row (WHERE clause)
    """

    table: str
    columns: tuple[str, ...]
    bool_columns: frozenset[str] = field(default_factory=frozenset)
    key_columns: tuple[str, ...] = ("id",)

    def build(
        self, changes: Mapping[str, Any], key: Sequence[Any], now: str | None = None
    ) -> tuple[str, list[Any]]:
        """
        Build the single UPDATE statement for a partial update.

        Sets every whitelisted column present in changes plus updated_at.
        Columns absent from changes are left untouched.

        Args:
            changes: Field name -> new value (validated)
            key: Values for key_columns, in order
            now: Timestamp for updated_at (defaults to utc_now())

        Returns:
            (statement, args)

        Raises:
            BadInput: If changes is empty or names a non-whitelisted field
        """
        if not changes:
            raise BadInput("No valid fields to update")

        unknown = set(changes) - set(self.columns)
        if unknown:
            raise BadInput(f"Unknown fields: {', '.join(sorted(unknown))}")

        if len(key) != len(self.key_columns):
            raise ValueError(
                f"Expected {len(self.key_columns)} key value(s) for {self.table}, got {len(key)}"
            )

        assignments = []
        args: list[Any] = []
        for column in self.columns:
            if column not in changes:
                continue
            assignments.append(f"{column} = ?")
            args.append(to_store_value(column, changes[column], self.bool_columns))

        # Always stamp updated_at
        assignments.append("updated_at = ?")
        args.append(now or utc_now())

        where = " AND ".join(f"{column} = ?" for column in self.key_columns)
        args.extend(key)

        sql = f"UPDATE {self.table} SET {', '.join(assignments)} WHERE {where}"
        return sql, args


def build_insert(
    table: str,
    values: Mapping[str, Any],
    bool_columns: frozenset[str] = frozenset(),
    now: str | None = None,
) -> tuple[str, list[Any]]:
    """
    Build an INSERT statement from a validated create model dump.

    created_at and updated_at are both stamped with the same timestamp.

    Args:
        table: Table name
        values: Column -> value, keys taken from a request model's fields
        bool_columns: Columns stored as 0/1
        now: Timestamp (defaults to utc_now())

    Returns:
        (statement, args)
    """
    stamp = now or utc_now()
    columns = list(values) + ["created_at", "updated_at"]
    args = [to_store_value(column, values[column], bool_columns) for column in values]
    args.extend([stamp, stamp])

    placeholders = ", ".join("?" for _ in columns)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    return sql, args
