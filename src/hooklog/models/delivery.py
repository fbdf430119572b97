"""Pydantic models for delivery records and endpoint responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeliveryRecord(BaseModel):
    """One authenticated, decoded webhook delivery.

    ``id`` comes from the delivery header when the sender supplies one and is
    not guaranteed unique. ``received_at`` is ingestion time, never a time
    taken from the payload.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    event_type: str = Field(..., serialization_alias="event")
    received_at: datetime
    payload: Any


class WebhookAck(BaseModel):
    """Acknowledgment returned for an accepted delivery."""

    ok: bool = True
    received_event: str
    id: str
    pong: bool | None = None


class EventsPage(BaseModel):
    """Read endpoint response: total stored plus the most recent records."""

    count: int
    events: list[DeliveryRecord]
