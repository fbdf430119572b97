"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hooklog.config import APP_VERSION, Settings, settings
from hooklog.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown; the event log itself needs no teardown."""
    store = app.state.event_store
    logger.info(
        "hooklog_started",
        extra={
            "capacity": store.capacity,
            "signatures_enforced": app.state.ingest_pipeline.signatures_enforced,
            "events_token_required": bool(app.state.settings.events_token),
        },
    )
    yield
    logger.info("hooklog_shutdown", extra={"stored": len(store)})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Each app owns exactly one EventStore and one IngestPipeline writing into
    it; handlers reach both through ``app.state``.
    """
    from hooklog.services.event_store import EventStore
    from hooklog.services.ingest import IngestPipeline

    app_settings = app_settings or settings

    app = FastAPI(
        title="hooklog",
        version=APP_VERSION,
        description="Signed webhook receiver with an ephemeral in-memory event log.",
        lifespan=lifespan,
    )

    store = EventStore(capacity=app_settings.event_store_capacity)
    app.state.settings = app_settings
    app.state.event_store = store
    app.state.ingest_pipeline = IngestPipeline(
        store,
        secret=app_settings.webhook_secret,
        raw_excerpt_limit=app_settings.raw_excerpt_limit,
    )

    from hooklog.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    # Register error handlers
    from hooklog.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from hooklog.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
