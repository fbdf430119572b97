"""Webhook ingestion: authenticate, decode, record.

Security layers (in order):
1. Signature validation over the raw body (skipped when no secret is set)
2. Payload decoding (never fatal)
3. Storage in the in-memory event log
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from hooklog.errors.exceptions import AuthenticationError
from hooklog.models.delivery import DeliveryRecord, WebhookAck
from hooklog.services.event_store import EventStore
from hooklog.services.id_generator import generate_id
from hooklog.services.payload_decoder import DEFAULT_EXCERPT_LIMIT, decode_payload
from hooklog.services.signatures import (
    SIGNATURE_1_HEADER,
    SIGNATURE_256_HEADER,
    verify_signature,
)

logger = logging.getLogger(__name__)

EVENT_HEADER = "x-github-event"
DELIVERY_HEADER = "x-github-delivery"
PING_EVENT = "ping"
UNKNOWN_EVENT = "unknown"


@dataclass(frozen=True)
class IngestOutcome:
    """A stored delivery and whether its body decoded cleanly."""

    record: DeliveryRecord
    decode_error: str | None = None

    @property
    def ack(self) -> WebhookAck:
        # Connectivity checks get a distinct acknowledgment but are stored as usual.
        pong = True if self.record.event_type == PING_EVENT else None
        return WebhookAck(received_event=self.record.event_type, id=self.record.id, pong=pong)


class IngestPipeline:
    """Turns one raw inbound delivery into a stored DeliveryRecord."""

    def __init__(
        self,
        store: EventStore,
        secret: str,
        raw_excerpt_limit: int = DEFAULT_EXCERPT_LIMIT,
    ) -> None:
        self.store = store
        self._secret = secret
        self.raw_excerpt_limit = raw_excerpt_limit
        if not secret:
            logger.warning(
                "webhook_secret_missing: HOOKLOG_WEBHOOK_SECRET is not set, "
                "deliveries will be accepted without signature verification"
            )

    @property
    def signatures_enforced(self) -> bool:
        return bool(self._secret)

    def handle(self, raw: bytes, headers: Mapping[str, str]) -> IngestOutcome:
        """Authenticate, decode and store one delivery.

        ``raw`` must be the body exactly as transmitted. Raises
        AuthenticationError without touching the store when the signature
        does not check out.
        """
        headers = {k.lower(): v for k, v in headers.items()}
        content_type = headers.get("content-type", "")
        event_type = headers.get(EVENT_HEADER) or UNKNOWN_EVENT

        if self.signatures_enforced:
            check = verify_signature(
                raw,
                self._secret,
                headers.get(SIGNATURE_256_HEADER),
                headers.get(SIGNATURE_1_HEADER),
            )
            if not check.valid:
                logger.warning(
                    "webhook_signature_mismatch",
                    extra={**check.diagnostics(), "content_type": content_type},
                )
                raise AuthenticationError("Invalid signature")

        decoded = decode_payload(raw, content_type, self.raw_excerpt_limit)
        if not decoded.ok:
            logger.warning(
                "webhook_payload_unparsed",
                extra={"error": decoded.error, "content_type": content_type},
            )

        delivery_id = headers.get(DELIVERY_HEADER) or generate_id("dlv_")
        record = self.store.record(delivery_id, event_type, decoded.payload)
        logger.info(
            "webhook_received",
            extra={"delivery_id": record.id, "event_type": record.event_type},
        )
        return IngestOutcome(record=record, decode_error=decoded.error)
