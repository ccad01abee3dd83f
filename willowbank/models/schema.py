# willowbank/models/schema.py
"""
Database schema definition for the willowbank SQLite store.

Provides DDL for tables and indexes, named migrations, and schema
initialization. Every statement is idempotent so init_db() runs on each start.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

import aiosqlite

logger = logging.getLogger(__name__)

REQUIREMENTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS requirements (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL CHECK(category IN ('needs', 'wants', 'nice-to-haves')),
    description TEXT NOT NULL,
    priority INTEGER NOT NULL DEFAULT 0,
    completed INTEGER NOT NULL DEFAULT 0,
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

PHASES_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS phases (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    start_month INTEGER CHECK(start_month IS NULL OR (start_month >= 1 AND start_month <= 12)),
    end_month INTEGER CHECK(end_month IS NULL OR (end_month >= 1 AND end_month <= 12)),
    order_index INTEGER NOT NULL,
    color TEXT,
    icon TEXT,
    completed INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

PHASE_TASKS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS phase_tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    phase_id INTEGER NOT NULL,
    description TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 0,
    order_index INTEGER NOT NULL,
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (phase_id) REFERENCES phases (id) ON DELETE CASCADE
)
"""

PLANTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS plants (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    common_name TEXT NOT NULL,
    scientific_name TEXT,
    category TEXT NOT NULL CHECK(category IN ('privacy', 'pollinators', 'vegetables', 'wildlife', 'trees', 'groundcover')),
    water_needs TEXT CHECK(water_needs IN ('low', 'moderate', 'high')),
    sun_requirements TEXT CHECK(sun_requirements IN ('full-sun', 'partial-sun', 'shade')),
    mature_size TEXT,
    bloom_time TEXT,
    native INTEGER NOT NULL DEFAULT 0,
    drought_tolerant INTEGER NOT NULL DEFAULT 0,
    wildlife_value TEXT,
    notes TEXT,
    recommended INTEGER NOT NULL DEFAULT 0,
    image_url TEXT,
    water_description TEXT,
    sun_description TEXT,
    care_instructions TEXT,
    hardiness_zone TEXT,
    bloom_color TEXT,
    foliage_type TEXT CHECK(foliage_type IN ('deciduous', 'evergreen', 'semi-evergreen')),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

COMPLIANCE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS compliance_requirements (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    requirement_type TEXT NOT NULL CHECK(requirement_type IN ('setback', 'water', 'fence', 'plant', 'permit')),
    jurisdiction TEXT NOT NULL DEFAULT 'Yolo County',
    code_reference TEXT,
    measurement TEXT,
    status TEXT NOT NULL DEFAULT 'active' CHECK(status IN ('active', 'deprecated', 'pending')),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

MIGRATIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    name TEXT PRIMARY KEY,
    applied_at TEXT NOT NULL
)
"""

TABLES_SQL = [
    REQUIREMENTS_TABLE_SQL,
    PHASES_TABLE_SQL,
    PHASE_TASKS_TABLE_SQL,
    PLANTS_TABLE_SQL,
    COMPLIANCE_TABLE_SQL,
    MIGRATIONS_TABLE_SQL,
]

INDEXES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_requirements_category ON requirements(category, priority)",
    "CREATE INDEX IF NOT EXISTS idx_phases_order ON phases(order_index)",
    "CREATE INDEX IF NOT EXISTS idx_phase_tasks_phase_id ON phase_tasks(phase_id, order_index)",
    "CREATE INDEX IF NOT EXISTS idx_plants_category ON plants(category, common_name)",
    "CREATE INDEX IF NOT EXISTS idx_compliance_type ON compliance_requirements(requirement_type)",
]

# Columns added to plants after the first release: name -> column DDL
PLANT_DETAIL_COLUMNS = {
    "image_url": "TEXT",
    "water_description": "TEXT",
    "sun_description": "TEXT",
    "care_instructions": "TEXT",
    "hardiness_zone": "TEXT",
    "bloom_color": "TEXT",
    "foliage_type": (
        "TEXT CHECK(foliage_type IN ('deciduous', 'evergreen', 'semi-evergreen'))"
    ),
}


async def _table_columns(db: aiosqlite.Connection, table: str) -> list[str]:
    cursor = await db.execute(f"PRAGMA table_info({table})")
    columns = await cursor.fetchall()
    return [col[1] for col in columns]


async def _add_plant_detail_columns(db: aiosqlite.Connection) -> None:
    """
    Add the plant detail columns to databases created before they existed.

    Changes:
        - image_url, water/sun descriptions, care instructions
        - hardiness_zone, bloom_color, foliage_type
    """
    column_names = await _table_columns(db, "plants")

    for name, ddl in PLANT_DETAIL_COLUMNS.items():
        if name in column_names:
            continue
        await db.execute(f"ALTER TABLE plants ADD COLUMN {name} {ddl}")
        logger.info(f"Added {name} column to plants table")


Migration = Callable[[aiosqlite.Connection], Awaitable[None]]

# Applied in order, each at most once, tracked by name in schema_migrations
MIGRATIONS: list[tuple[str, Migration]] = [
    ("001_plant_detail_columns", _add_plant_detail_columns),
]


async def _applied_migrations(db: aiosqlite.Connection) -> set[str]:
    cursor = await db.execute("SELECT name FROM schema_migrations")
    rows = await cursor.fetchall()
    return {row[0] for row in rows}


async def apply_migrations(
    db: aiosqlite.Connection, migrations: list[tuple[str, Migration]] | None = None
) -> list[str]:
    """
    Run every migration that has not been recorded yet.

    A failing migration is logged and skipped; it is retried on the next start.

    Args:
        db: Database connection
        migrations: Migrations to consider (defaults to MIGRATIONS)

    Returns:
        Names of the migrations applied by this call
    """
    migrations = MIGRATIONS if migrations is None else migrations
    applied = await _applied_migrations(db)
    newly_applied = []

    for name, migrate in migrations:
        if name in applied:
            continue

        logger.info(f"Applying migration {name}")
        try:
            await migrate(db)
            await db.execute(
                "INSERT INTO schema_migrations (name, applied_at) VALUES (?, ?)",
                (name, datetime.now(timezone.utc).isoformat(timespec="microseconds")),
            )
            await db.commit()
        except aiosqlite.Error as e:
            await db.rollback()
            logger.warning(f"Migration {name} failed, continuing startup: {e}")
            continue

        newly_applied.append(name)

    return newly_applied


async def init_db(db_path: str) -> None:
    """
    Initialize database schema with WAL mode and optimal settings.

    Handles schema migrations automatically.

    Args:
        db_path: Path to SQLite database file

    Settings:
        - WAL mode: Concurrent reads + writes
        - synchronous=NORMAL: Good durability/performance balance
        - foreign_keys=ON: Enforce phase -> task cascade
    """
    async with aiosqlite.connect(db_path) as db:
        # Enable WAL mode for concurrent access
        await db.execute("PRAGMA journal_mode=WAL")

        # Performance/durability balance
        await db.execute("PRAGMA synchronous=NORMAL")

        await db.execute("PRAGMA foreign_keys=ON")

        for table_sql in TABLES_SQL:
            await db.execute(table_sql)
        for index_sql in INDEXES_SQL:
            await db.execute(index_sql)
        await db.commit()

        applied = await apply_migrations(db)
        if applied:
            logger.info(f"Applied migrations: {', '.join(applied)}")

        logger.info(f"Initialized database at {db_path}")
