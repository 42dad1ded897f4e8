"""
Content Desk FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import db
from backend.config import settings
from backend.routes import actions as action_routes
from backend.routes import pages as pages_routes
from backend.routes import sdui as sdui_routes
from backend.routes import uploads as upload_routes
from engine.a2ui.standard import initialize

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Build and freeze the A2UI component registry
    - Initialize database pool
    - Close database pool on shutdown
    """
    # Startup
    registry = initialize()
    logger.info("A2UI registry ready (%d components)", len(registry))

    await db.init_pool()

    yield

    # Shutdown
    await db.close_pool()


app = FastAPI(
    title="Content Desk",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(sdui_routes.router)
app.include_router(action_routes.router)
app.include_router(upload_routes.router)
app.include_router(pages_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
