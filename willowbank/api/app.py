# willowbank/api/app.py
"""
FastAPI application factory.

Wires CORS, request logging, error translation, the resource routers and the
liveness endpoint. The store lifecycle runs inside the app lifespan.
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from willowbank.api.errors import register_error_handlers
from willowbank.api.routes import ROUTERS
from willowbank.background.lifecycle import ServerLifecycle
from willowbank.config.loader import load_config
from willowbank.config.schema import WillowbankConfig
from willowbank.models.responses import HealthResponse
from willowbank.services.updates import utc_now

logger = logging.getLogger(__name__)


def create_app(
    config: WillowbankConfig | None = None, lifecycle: ServerLifecycle | None = None
) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        config: Configuration (defaults to load_config())
        lifecycle: Lifecycle owning the store (defaults to one built from config)

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()
    lifecycle = lifecycle or ServerLifecycle(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await lifecycle.startup()
        try:
            yield
        finally:
            await lifecycle.shutdown()

    app = FastAPI(title="Willowbank Planner API", version=config.version, lifespan=lifespan)
    app.state.config = config
    app.state.lifecycle = lifecycle

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.cors_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    register_error_handlers(app, config)

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        """Liveness probe."""
        return HealthResponse(timestamp=utc_now(), version=config.version).model_dump()

    logger.info(f"HTTP app created with {len(ROUTERS)} resource routers")
    return app
