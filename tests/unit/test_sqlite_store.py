# tests/unit/test_sqlite_store.py
"""
Unit tests for SQLiteRecordStore persistence.

Tests the fetch/execute primitives, error wrapping, the phase -> task
cascade, and schema migrations.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from willowbank.errors import StoreError
from willowbank.models.schema import MIGRATIONS, PLANT_DETAIL_COLUMNS, apply_migrations, init_db
from willowbank.models.sqlite_store import SQLiteRecordStore

NOW = "2026-01-01T00:00:00+00:00"


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> SQLiteRecordStore:
    """Create and initialize a test SQLite store."""
    store = SQLiteRecordStore(str(tmp_path / "test.db"))
    await store.initialize()
    return store


async def _insert_phase(store: SQLiteRecordStore, title: str = "Grading", order: int = 0) -> int:
    result = await store.execute(
        "INSERT INTO phases (title, order_index, created_at, updated_at) VALUES (?, ?, ?, ?)",
        (title, order, NOW, NOW),
    )
    return result.last_row_id


@pytest.mark.asyncio
async def test_execute_returns_row_id_and_count(store: SQLiteRecordStore):
    """Insert reports the new id; update reports affected rows."""
    first = await _insert_phase(store, "One")
    second = await _insert_phase(store, "Two", 1)
    assert second == first + 1

    result = await store.execute("UPDATE phases SET completed = 1")
    assert result.row_count == 2


@pytest.mark.asyncio
async def test_fetch_one_and_fetch_all_return_dicts(store: SQLiteRecordStore):
    phase_id = await _insert_phase(store)

    row = await store.fetch_one("SELECT * FROM phases WHERE id = ?", (phase_id,))
    assert row["title"] == "Grading"
    assert row["completed"] == 0

    rows = await store.fetch_all("SELECT id, title FROM phases")
    assert rows == [{"id": phase_id, "title": "Grading"}]


@pytest.mark.asyncio
async def test_fetch_one_missing_returns_none(store: SQLiteRecordStore):
    assert await store.fetch_one("SELECT * FROM phases WHERE id = ?", (999,)) is None


@pytest.mark.asyncio
async def test_driver_errors_become_store_error(store: SQLiteRecordStore):
    """Constraint violations and bad SQL surface as StoreError with the cause chained."""
    with pytest.raises(StoreError) as exc_info:
        await store.execute(
            "INSERT INTO requirements (category, description, created_at, updated_at) "
            "VALUES ('bogus', 'x', ?, ?)",
            (NOW, NOW),
        )
    assert isinstance(exc_info.value.__cause__, aiosqlite.Error)

    with pytest.raises(StoreError):
        await store.fetch_all("SELECT * FROM no_such_table")


@pytest.mark.asyncio
async def test_failed_execute_does_not_persist(store: SQLiteRecordStore):
    with pytest.raises(StoreError):
        await store.execute(
            "INSERT INTO phases (title, order_index, start_month, created_at, updated_at) "
            "VALUES ('Bad', 0, 13, ?, ?)",
            (NOW, NOW),
        )

    assert await store.fetch_all("SELECT * FROM phases") == []


@pytest.mark.asyncio
async def test_deleting_phase_cascades_to_tasks(store: SQLiteRecordStore):
    phase_id = await _insert_phase(store)
    other_id = await _insert_phase(store, "Planting", 1)
    for owner in (phase_id, phase_id, other_id):
        await store.execute(
            "INSERT INTO phase_tasks (phase_id, description, order_index, created_at, updated_at) "
            "VALUES (?, 'task', 0, ?, ?)",
            (owner, NOW, NOW),
        )

    await store.execute("DELETE FROM phases WHERE id = ?", (phase_id,))

    remaining = await store.fetch_all("SELECT phase_id FROM phase_tasks")
    assert remaining == [{"phase_id": other_id}]


@pytest.mark.asyncio
async def test_task_requires_existing_phase(store: SQLiteRecordStore):
    with pytest.raises(StoreError):
        await store.execute(
            "INSERT INTO phase_tasks (phase_id, description, order_index, created_at, updated_at) "
            "VALUES (42, 'orphan', 0, ?, ?)",
            (NOW, NOW),
        )


@pytest.mark.asyncio
async def test_initialize_is_idempotent(tmp_path: Path):
    db_path = str(tmp_path / "twice.db")
    store = SQLiteRecordStore(db_path)
    await store.initialize()
    await _insert_phase(store)

    await SQLiteRecordStore(db_path).initialize()

    rows = await store.fetch_all("SELECT * FROM phases")
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_migrations_recorded_once(store: SQLiteRecordStore):
    rows = await store.fetch_all("SELECT name FROM schema_migrations")
    assert [row["name"] for row in rows] == [name for name, _ in MIGRATIONS]

    async with aiosqlite.connect(store.db_path) as db:
        assert await apply_migrations(db) == []


@pytest.mark.asyncio
async def test_plant_detail_migration_upgrades_old_table(tmp_path: Path):
    """A plants table from before the detail columns gains them on init."""
    db_path = str(tmp_path / "old.db")
    async with aiosqlite.connect(db_path) as db:
        await db.execute(
            "CREATE TABLE plants (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "common_name TEXT NOT NULL, category TEXT NOT NULL, "
            "native INTEGER NOT NULL DEFAULT 0, drought_tolerant INTEGER NOT NULL DEFAULT 0, "
            "recommended INTEGER NOT NULL DEFAULT 0, "
            "created_at TEXT NOT NULL, updated_at TEXT NOT NULL)"
        )
        await db.commit()

    await init_db(db_path)

    async with aiosqlite.connect(db_path) as db:
        cursor = await db.execute("PRAGMA table_info(plants)")
        columns = {row[1] for row in await cursor.fetchall()}
    assert set(PLANT_DETAIL_COLUMNS) <= columns


@pytest.mark.asyncio
async def test_failing_migration_is_skipped(tmp_path: Path):
    """A migration that errors is logged, not recorded, and later ones still run."""
    db_path = str(tmp_path / "mig.db")
    await init_db(db_path)

    async def broken(db):
        await db.execute("ALTER TABLE no_such_table ADD COLUMN x TEXT")

    async def works(db):
        await db.execute("CREATE TABLE extra (id INTEGER)")

    async with aiosqlite.connect(db_path) as db:
        applied = await apply_migrations(db, [("900_broken", broken), ("901_works", works)])
        cursor = await db.execute("SELECT name FROM schema_migrations")
        names = {row[0] for row in await cursor.fetchall()}

    assert applied == ["901_works"]
    assert "900_broken" not in names
    assert "901_works" in names


@pytest.mark.asyncio
async def test_close_checkpoints_without_error(store: SQLiteRecordStore):
    await _insert_phase(store)
    await store.close()

    # Store remains usable; connections are per call
    assert len(await store.fetch_all("SELECT * FROM phases")) == 1


@pytest.mark.asyncio
async def test_integer_overflow_becomes_store_error(store: SQLiteRecordStore):
    with pytest.raises(StoreError) as exc_info:
        await store.fetch_one("SELECT * FROM phases WHERE id = ?", (2**70,))
    assert isinstance(exc_info.value.__cause__, OverflowError)

    with pytest.raises(StoreError):
        await store.execute("UPDATE phases SET order_index = ? WHERE id = 1", (2**70,))
    with pytest.raises(StoreError):
        await store.fetch_all("SELECT * FROM phases WHERE id = ?", (2**70,))
