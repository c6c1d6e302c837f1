"""LOTR API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the uniform error envelope
    - CORS configured from settings (not hardcoded)
    - The connection pool and the upstream HTTP client are built in the lifespan,
      stored on app.state, and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event
    - Database unreachable at boot is logged, not fatal: /health reports it as 503
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from lotr_api.api.error_handlers import register_error_handlers
from lotr_api.api.middleware import add_security_headers
from lotr_api.api.routes import catalog, health, reviews
from lotr_api.config import get_settings
from lotr_api.infrastructure.database import DatabaseSessionManager
from lotr_api.infrastructure.observability import log_requests, setup_logging
from lotr_api.infrastructure.one_api_client import OneApiClient, build_http_client
from lotr_api.infrastructure.rate_limit import limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.effective_log_format)
    db_manager = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    http_client = build_http_client(
        settings.one_api_base_url,
        settings.one_api_key,
        settings.one_api_timeout_seconds,
    )
    app.state.db_manager = db_manager
    app.state.one_api_client = OneApiClient(http_client)

    if not await db_manager.health_check():
        logger.warning("Database unreachable at startup")
    logger.info(f"LOTR API started ({settings.environment.value})")
    try:
        yield
    finally:
        logger.info("LOTR API shutting down")
        await http_client.aclose()
        await db_manager.close()


app = FastAPI(
    title="Lord of the Rings API", version=health.SERVICE_VERSION,
    lifespan=lifespan,
)

settings = get_settings()
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(add_security_headers)
app.middleware("http")(log_requests)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(catalog.movies_router)
app.include_router(catalog.characters_router)
app.include_router(reviews.router)

register_error_handlers(app)
