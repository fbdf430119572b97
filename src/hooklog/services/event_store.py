"""Bounded in-memory log of recent webhook deliveries.

Records are held newest-first in a ``deque(maxlen=capacity)``: inserting at
the front of a full deque drops the oldest record from the tail, so the store
can never exceed its capacity and never refuses an insertion.
"""

from __future__ import annotations

import threading
from collections import deque
from itertools import islice
from datetime import datetime, timezone
from typing import Any

from hooklog.models.delivery import DeliveryRecord

DEFAULT_CAPACITY = 200


class EventStore:
    """Process-local, capacity-bounded sequence of delivery records."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._records: deque[DeliveryRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._records.maxlen  # type: ignore[return-value]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def push(self, record: DeliveryRecord) -> None:
        """Insert a record as the most recent one, evicting the oldest if full."""
        with self._lock:
            self._records.appendleft(record)

    def record(self, delivery_id: str, event_type: str, payload: Any) -> DeliveryRecord:
        """Build a record stamped with the current time and push it.

        Stamping happens under the same lock as the insertion, so
        ``received_at`` never decreases along insertion order.
        """
        with self._lock:
            entry = DeliveryRecord(
                id=delivery_id,
                event_type=event_type,
                received_at=datetime.now(timezone.utc),
                payload=payload,
            )
            self._records.appendleft(entry)
        return entry

    def peek(self, limit: int) -> tuple[list[DeliveryRecord], int]:
        """Return up to ``limit`` records newest-first, and the total stored.

        Both values come from one snapshot. Callers clamp ``limit``.
        """
        with self._lock:
            total = len(self._records)
            count = max(0, min(limit, total))
            records = list(islice(self._records, count))
        return records, total

    def snapshot(self) -> list[DeliveryRecord]:
        """Return every stored record, newest-first."""
        with self._lock:
            return list(self._records)
