"""Webhook ingestion endpoint."""

import logging

from fastapi import APIRouter, Request
from starlette.requests import ClientDisconnect

from hooklog.dependencies import Pipeline
from hooklog.errors.exceptions import DeliveryAbortedError
from hooklog.models.delivery import WebhookAck

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])


@router.post("/webhook", response_model=WebhookAck, response_model_exclude_none=True)
async def receive_webhook(request: Request, pipeline: Pipeline) -> WebhookAck:
    """Authenticate, decode and record one signed delivery.

    The body is read as raw bytes and handed to the pipeline untouched; the
    signature covers those exact bytes.
    """
    try:
        raw = await request.body()
    except ClientDisconnect:
        logger.info("webhook_client_disconnected")
        raise DeliveryAbortedError()

    outcome = pipeline.handle(raw, request.headers)
    return outcome.ack
