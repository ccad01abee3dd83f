# willowbank/models/sqlite_store.py
"""
SQLite-backed record store.

Provides the async fetch_one / fetch_all / execute primitives with WAL mode.
Each call opens its own connection and each execute commits its own
statement, so multi-statement operations are never wrapped in a transaction.
Integer overflow while binding arguments is reported as StoreError like any
other driver failure.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import aiosqlite

from willowbank.errors import StoreError
from willowbank.models.schema import init_db
from willowbank.models.store import ExecuteResult, RecordStore

logger = logging.getLogger(__name__)


class SQLiteRecordStore(RecordStore):
    """
    Async SQLite-backed record storage.

    Features:
        - WAL mode for concurrent reads/writes
        - foreign_keys=ON on every connection (phase -> task cascade)
        - No persistent connections (avoids resource leaks)
    """

    def __init__(self, db_path: str) -> None:
        """
        Initialize SQLite record store.

        Args:
            db_path: Path to SQLite database file
        """
        self._db_path = db_path
        logger.info(f"Created SQLiteRecordStore with path: {db_path}")

    @property
    def db_path(self) -> str:
        return self._db_path

    async def initialize(self) -> None:
        """Initialize database schema and apply pending migrations."""
        try:
            await init_db(self._db_path)
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to initialize database: {e}") from e

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            # Per-connection settings; SQLite does not persist these
            await db.execute("PRAGMA foreign_keys=ON")
            await db.execute("PRAGMA busy_timeout=5000")
            yield db

    async def fetch_one(self, statement: str, args: Sequence[Any] = ()) -> dict[str, Any] | None:
        try:
            async with self._connect() as db:
                cursor = await db.execute(statement, tuple(args))
                row = await cursor.fetchone()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error(f"fetch_one failed: {e}")
            raise StoreError(str(e)) from e

        return dict(row) if row is not None else None

    async def fetch_all(self, statement: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        try:
            async with self._connect() as db:
                cursor = await db.execute(statement, tuple(args))
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error(f"fetch_all failed: {e}")
            raise StoreError(str(e)) from e

        return [dict(row) for row in rows]

    async def execute(self, statement: str, args: Sequence[Any] = ()) -> ExecuteResult:
        try:
            async with self._connect() as db:
                try:
                    cursor = await db.execute(statement, tuple(args))
                    await db.commit()
                except (aiosqlite.Error, OverflowError):
                    await db.rollback()
                    raise
                return ExecuteResult(last_row_id=cursor.lastrowid, row_count=cursor.rowcount)
        except (aiosqlite.Error, OverflowError) as e:
            logger.error(f"execute failed: {e}")
            raise StoreError(str(e)) from e

    async def close(self) -> None:
        """
        Checkpoint WAL and close database.

        Truncates WAL file to avoid unbounded growth.
        """
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute("PRAGMA wal_checkpoint(TRUNCATE)")
                logger.info("WAL checkpoint completed")
        except aiosqlite.Error as e:
            logger.warning(f"WAL checkpoint failed: {e}")
