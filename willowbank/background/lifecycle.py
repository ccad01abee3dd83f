# willowbank/background/lifecycle.py
"""
Server lifecycle management.

Owns the record store: opened and initialized on startup, checkpointed and
released on shutdown. The HTTP app reads the store from here instead of a
module-level singleton.
"""

import logging

from willowbank.config.loader import get_database_path
from willowbank.config.schema import WillowbankConfig
from willowbank.models.sqlite_store import SQLiteRecordStore
from willowbank.models.store import RecordStore
from willowbank.services.seed import seed_default_requirements

logger = logging.getLogger(__name__)


class ServerLifecycle:
    """
    Server lifecycle coordinator.

    Manages:
        - Database initialization and migrations on startup
        - Seeding default requirements into an empty store
        - Graceful shutdown (WAL checkpoint)
    """

    def __init__(self, config: WillowbankConfig, store: RecordStore | None = None) -> None:
        """
        Initialize server lifecycle manager.

        Args:
            config: Application configuration
            store: Pre-built store (defaults to SQLite at the configured path)
        """
        self._config = config
        self._store = store or SQLiteRecordStore(str(get_database_path(config)))
        self._started = False
        logger.info("Created ServerLifecycle")

    @property
    def store(self) -> RecordStore:
        """Get the record store (for the API layer to hand to services)."""
        return self._store

    @property
    def started(self) -> bool:
        return self._started

    async def startup(self) -> None:
        """
        Start the server lifecycle.

        Steps:
            1. Initialize database schema and apply migrations
            2. Seed default requirements if the store is empty
        """
        logger.info("Starting server lifecycle...")

        await self._store.initialize()

        if self._config.database.seed_defaults:
            seeded = await seed_default_requirements(self._store)
            if seeded:
                logger.info(f"Seeded {seeded} default requirement(s)")

        self._started = True
        logger.info(f"Server lifecycle started ({self._config.environment})")

    async def shutdown(self) -> None:
        """Shut down gracefully: close the store (WAL checkpoint)."""
        logger.info("Shutting down server lifecycle...")

        await self._store.close()
        self._started = False

        logger.info("Server lifecycle shutdown complete")
