"""Courier API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CourierError → structured JSON responses
    - CORS allows exactly one configured origin, with credentials
    - Request bodies larger than MAX_BODY_BYTES (declared or streamed) are refused with 413
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Settings read once here; components receive them through dependencies
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courier.api.body_limit import BodySizeLimitMiddleware
from courier.api.error_handlers import register_error_handlers
from courier.api.routes import api_requests, auth, collections, execute, health
from courier.config import get_settings
from courier.infrastructure.database import close_db, init_db
from courier.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Courier API started")
    yield
    await close_db()
    logger.info("Courier API shutting down")


app = FastAPI(title="Courier API", version="1.0.0", lifespan=lifespan)
settings = get_settings()

app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

# Added after the size guard so CORS headers also reach rejected responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(collections.router)
app.include_router(api_requests.router)
app.include_router(execute.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve on HOST:PORT from settings."""
    uvicorn.run(
        "courier.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
