"""Master API router mounted at /api."""

from fastapi import APIRouter

from hooklog.api.routes import events, health, webhook

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(webhook.router)
api_router.include_router(events.router)
