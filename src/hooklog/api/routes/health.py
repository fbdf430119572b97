"""Health check endpoints."""

from fastapi import APIRouter

from hooklog.config import APP_VERSION
from hooklog.dependencies import EventLog, Pipeline

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "hooklog", "version": APP_VERSION}


@router.get("/health/live")
async def liveness():
    """Liveness probe: always 200 while the process is running."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(store: EventLog, pipeline: Pipeline):
    """Readiness probe with event log fill level and signature enforcement."""
    return {
        "status": "ready",
        "checks": {
            "event_store": {"stored": len(store), "capacity": store.capacity},
            "signatures": "enforced" if pipeline.signatures_enforced else "disabled",
        },
    }
