"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from hooklog.config import Settings
from hooklog.services.event_store import EventStore
from hooklog.services.ingest import IngestPipeline


def get_settings(request: Request) -> Settings:
    """Return the settings the app was created with."""
    return request.app.state.settings


def get_event_store(request: Request) -> EventStore:
    """Return the app's single event store."""
    return request.app.state.event_store


def get_ingest_pipeline(request: Request) -> IngestPipeline:
    """Return the app's ingest pipeline (bound to the same event store)."""
    return request.app.state.ingest_pipeline


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
EventLog = Annotated[EventStore, Depends(get_event_store)]
Pipeline = Annotated[IngestPipeline, Depends(get_ingest_pipeline)]
